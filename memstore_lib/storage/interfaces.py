from typing import Dict, Optional, Protocol, Tuple, TypeVar, runtime_checkable

V = TypeVar("V")


@runtime_checkable
class StoreProtocol(Protocol[V]):
    """Capability set consumers depend on, mirroring `memstore_lib.storage.store.Store`.

    Implementations should follow the semantics documented on `Store`
    (copies from `all`, errors only from `flush`/`close`, idempotent close).
    """

    def set(self, key: str, value: V) -> None: ...

    def get(self, key: str) -> Tuple[Optional[V], bool]: ...

    def delete(self, key: str) -> None: ...

    def all(self) -> Dict[str, V]: ...

    def flush(self) -> None: ...

    def close(self) -> None: ...
