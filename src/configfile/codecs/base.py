from __future__ import annotations

import abc
from typing import Any, ClassVar

from configfile.errors import DecodeError, EncodeError
from configfile.formats import FormatTag


class BaseCodec(abc.ABC):
    """Shared error translation for codec adapters.

    Subclasses implement :meth:`_encode` and :meth:`_decode` against their
    backend and list the backend's exception types in ``encode_errors`` and
    ``decode_errors``. Those are re-raised as :class:`EncodeError` /
    :class:`DecodeError` with the original chained as ``__cause__``.
    """

    format: ClassVar[FormatTag]
    typed: ClassVar[bool] = True

    encode_errors: ClassVar[tuple[type[BaseException], ...]] = (
        TypeError,
        ValueError,
    )
    decode_errors: ClassVar[tuple[type[BaseException], ...]] = (ValueError,)

    def encode(self, data: Any, *, root: str = "config") -> bytes:
        try:
            return self._encode(data, root=root)
        except EncodeError:
            raise
        except self.encode_errors as e:
            raise EncodeError(self.format, e) from e

    def decode(self, raw: bytes) -> Any:
        try:
            return self._decode(raw)
        except DecodeError:
            raise
        except self.decode_errors as e:
            raise DecodeError(self.format, e) from e

    @abc.abstractmethod
    def _encode(self, data: Any, *, root: str) -> bytes: ...

    @abc.abstractmethod
    def _decode(self, raw: bytes) -> Any: ...
