"""Serializers turning the whole store mapping into bytes and back.

Every serializer is symmetric: `load(dump(mapping))` reproduces an
equivalent mapping. Failures surface as the underlying library's exception;
the store wraps them in `SerializationError`.
"""
from typing import Any, Callable, Dict, Protocol
import base64
import json
import os
import pickle

import yaml
from cryptography.fernet import Fernet
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC


class Serializer(Protocol):
    """Serialize/deserialize a mapping for backends that store bytes.

    Implementations should be symmetric: `dump` -> bytes, `load` <- bytes.
    `extension` is a file suffix hint (without the dot).
    """

    extension: str

    def dump(self, value: Any) -> bytes: ...

    def load(self, data: bytes) -> Any: ...


class JSONSerializer:
    """Serializer using JSON (text). The default, since snapshots stay human readable.

    Objects exposing `__dict__` are written as their attribute mapping; they
    come back as plain dicts.
    """

    extension = "json"

    def __init__(self, indent: int | None = None) -> None:
        self.indent = indent

    def dump(self, value: Any) -> bytes:
        return json.dumps(value, indent=self.indent, default=lambda o: o.__dict__).encode("utf-8")

    def load(self, data: bytes) -> Any:
        return json.loads(data.decode("utf-8"))


class YAMLSerializer:
    """Serializer using YAML (text). Only plain YAML types are accepted."""

    extension = "yml"

    def dump(self, value: Any) -> bytes:
        return yaml.safe_dump(value, sort_keys=False).encode("utf-8")

    def load(self, data: bytes) -> Any:
        return yaml.safe_load(data.decode("utf-8"))


class PickleSerializer:
    """Serializer using pickle (binary).

    Keeps arbitrary Python values intact (tuples, sets, custom classes).
    Only load snapshots you wrote yourself: unpickling can execute code.
    """

    extension = "pkl"

    def dump(self, value: Any) -> bytes:
        return pickle.dumps(value, protocol=pickle.HIGHEST_PROTOCOL)

    def load(self, data: bytes) -> Any:
        return pickle.loads(data)


class EncryptedSerializer:
    """Serializer that encrypts payloads using Fernet (symmetric, authenticated).

    Provide either `key` (a Fernet key) or `password`. In password mode every
    payload carries its own random salt and PBKDF2 iteration count so the
    key can be derived again on load. The inner encoding is delegated to
    `base_serializer` (JSON by default).
    """

    extension = "enc"

    def __init__(
        self,
        *,
        key: bytes | None = None,
        password: str | None = None,
        iterations: int = 390000,
        base_serializer: Serializer | None = None,
    ) -> None:
        if key is None and password is None:
            raise ValueError("EncryptedSerializer requires either `key` or `password`")
        self._key = key
        self._password = password
        self._iterations = iterations
        self.base_serializer = base_serializer or JSONSerializer()

    @staticmethod
    def _derive_key(password: str, salt: bytes, iterations: int) -> bytes:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=salt,
            iterations=iterations,
        )
        return base64.urlsafe_b64encode(kdf.derive(password.encode("utf-8")))

    def dump(self, value: Any) -> bytes:
        """Serialize and encrypt value, returning a framed JSON blob."""
        inner = self.base_serializer.dump(value)
        if self._password is not None:
            salt = os.urandom(16)
            key = self._derive_key(self._password, salt, self._iterations)
            frame = {
                "v": 1,
                "mode": "password",
                "kdf": "pbkdf2",
                "iterations": self._iterations,
                "salt": base64.urlsafe_b64encode(salt).decode("ascii"),
            }
        else:
            key = self._key
            frame = {"v": 1, "mode": "key"}
        ct = Fernet(key).encrypt(inner)
        frame["ct"] = base64.urlsafe_b64encode(ct).decode("ascii")
        return json.dumps(frame).encode("utf-8")

    def load(self, data: bytes) -> Any:
        """Parse framed blob, derive key if needed, decrypt and deserialize."""
        frame = json.loads(data.decode("utf-8"))
        if not isinstance(frame, dict):
            raise ValueError("unknown frame format")
        mode = frame.get("mode")
        if mode == "password":
            if self._password is None:
                raise ValueError("serializer was not configured with a password")
            salt = base64.urlsafe_b64decode(frame["salt"].encode("ascii"))
            key = self._derive_key(self._password, salt, frame.get("iterations", self._iterations))
        elif mode == "key":
            if self._key is None:
                raise ValueError("serializer was not configured with a key")
            key = self._key
        else:
            raise ValueError("unknown frame format")
        ct = base64.urlsafe_b64decode(frame["ct"].encode("ascii"))
        return self.base_serializer.load(Fernet(key).decrypt(ct))


_SERIALIZERS: Dict[str, Callable[..., Serializer]] = {
    "json": JSONSerializer,
    "yaml": YAMLSerializer,
    "pickle": PickleSerializer,
    "encrypted": EncryptedSerializer,
}


def get_serializer(name: str = "json", **options: Any) -> Serializer:
    """Return a serializer instance by name.

    `options` are passed to the serializer constructor; only the encrypted
    serializer takes any (`key`, `password`, `iterations`, `base_serializer`).
    """
    try:
        factory = _SERIALIZERS[name.lower()]
    except KeyError:
        raise ValueError(f"unknown serializer: {name!r}") from None
    return factory(**options)
