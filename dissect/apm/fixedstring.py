from __future__ import annotations


class FixedString(bytes):
    """Fixed-length, NUL padded ASCII string.

    The raw buffer is kept verbatim, bytes following the first NUL are carried along but never interpreted.
    Subclasses set ``size``.
    """

    size: int = 0

    def __new__(cls, data: bytes) -> FixedString:
        if len(data) != cls.size:
            raise ValueError(f"{cls.__name__} requires exactly {cls.size} bytes, got {len(data)}")
        return super().__new__(cls, data)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} {self.value!r}>"

    @property
    def value(self) -> str:
        return self.split(b"\x00", 1)[0].decode("ascii", "replace")

    @classmethod
    def from_str(cls, value: str) -> FixedString:
        encoded = value.encode("ascii")
        if len(encoded) > cls.size:
            raise ValueError(f"{value!r} does not fit in {cls.__name__} ({len(encoded)} > {cls.size} bytes)")
        return cls(encoded.ljust(cls.size, b"\x00"))

    @classmethod
    def coerce(cls, value: FixedString | str | bytes) -> FixedString:
        """Turn ``value`` into an instance of this class.

        Text is encoded with :meth:`from_str`, raw bytes must be exactly ``size`` bytes long.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.from_str(value)
        if isinstance(value, (bytes, bytearray)) and not isinstance(value, FixedString):
            return cls(bytes(value))
        raise TypeError(f"Expected str, bytes or {cls.__name__}, got {value.__class__.__name__}")

    @classmethod
    def empty(cls) -> FixedString:
        return cls(b"\x00" * cls.size)


class String16(FixedString):
    size = 16


class String32(FixedString):
    size = 32
