from configfile.formats import FormatTag, tag_for_path
from configfile.paths import user_config_file


def test_user_config_file(tmp_path, monkeypatch):
    calls = []

    def fake_user_config_path(appname, appauthor=None):
        calls.append((appname, appauthor))
        return tmp_path / appname

    monkeypatch.setattr("configfile.paths.user_config_path", fake_user_config_path)

    path = user_config_file("myapp", "settings.toml")

    assert path == tmp_path / "myapp" / "settings.toml"
    assert calls == [("myapp", False)]
    assert tag_for_path(path) is FormatTag.TOML
    assert not path.parent.exists()
