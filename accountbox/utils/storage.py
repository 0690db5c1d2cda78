"""The record storage layer of Accountbox.

Everything stored in the record store is a Record: a dataclass instance which can be turned into a `dict` with string keys and back (see `RecordStorage`).

`CommonStorage` is the `RecordStorage` of plain dictionaries, the only kind the database backend has to understand.
`CommonStorageRecordWrapper` turns a `CommonStorage` into a `RecordStorage` of a concrete type with the help of a `CommonStorageAdapter`,
so a new record type only needs a small subclass instead of a new storage implementation.
`DataclassCommonStorageAdapter` is the adapter for `dataclasses.dataclass` types, which covers every record in Accountbox.

`UnQLiteStorage` is the only `CommonStorage` backend: one collection in an UnQLite database.
"""
import asyncio
import dataclasses
from typing import (
    Any,
    AsyncIterable,
    Awaitable,
    Dict,
    Generic,
    List,
    Optional,
    Type,
    TypeVar,
)

from unqlite import Collection, UnQLite

from . import global_executor

T = TypeVar("T")


class RecordStorage(Generic[T]):
    """A protocol type which describes basic database operations on a type.

    All queries are `dict`s with `str` as key, a record matches a query when every key of the query has an equal value in the record.
    """

    def initialize(self) -> Awaitable[None]:
        """Prepare the storage for later calls. Calling it again does nothing."""
        ...

    def store(self, record: T) -> Awaitable[T]:
        """Save a record as new."""
        ...

    def find(self, query: Dict[str, Any]) -> AsyncIterable[T]:
        """Find records which completely matchs `query`."""
        ...

    def find_one(self, query: Dict[str, Any]) -> Awaitable[Optional[T]]:
        """Find one record which completely matchs `query`."""
        ...

    def update_one(self, query: Dict[str, Any], updated: T) -> Awaitable[Optional[T]]:
        """Replace one record, which matchs `query`, with `updated`."""
        ...


class CommonStorage(RecordStorage[Dict[str, Any]]):
    """A protocol type which is `RecordStorage` with `Dict[str, Any]` (read/write `dict`) for general purpose."""

    pass


class CommonStorageAdapter(Generic[T]):
    """Adapter for `CommonStorageRecordWrapper`.
    Implement `record2dict` and `dict2record` to transform the data between record and dict.
    """

    def record2dict(self, record: T) -> Dict[str, Any]:
        """Build a `dict` from `record`."""
        ...

    def dict2record(self, d: Dict[str, Any]) -> T:
        """Build a record from a `d`."""
        ...


class CommonStorageRecordWrapper(RecordStorage[T]):
    """
    A wrapper for `CommonStorage`, convert the common storage to a `RecordStorage` which can read and write a record type directly.

    The typical way to use this class is to extend it, pass though the common storage and add an implementation of `CommonStorageAdapter`:

    ````python
    class UserRecordStorage(CommonStorageRecordWrapper[UserRecord]):
        def __init__(self, common_storage: CommonStorage) -> None:
            super().__init__(common_storage, DataclassCommonStorageAdapter(UserRecord))
    ````
    """

    def __init__(
        self, common_storage: CommonStorage, adapter: CommonStorageAdapter[T]
    ) -> None:
        self.common_storage = common_storage
        self.adapter = adapter
        super().__init__()

    async def initialize(self) -> None:
        await self.common_storage.initialize()

    async def store(self, record: T) -> T:
        d = self.adapter.record2dict(record)
        result = await self.common_storage.store(d)
        return self.adapter.dict2record(result)

    async def find(self, query: Dict[str, Any]) -> AsyncIterable[T]:
        async for doc in self.common_storage.find(query):
            yield self.adapter.dict2record(doc)

    async def find_one(self, query: Dict[str, Any]) -> Optional[T]:
        result = await self.common_storage.find_one(query)
        if result:
            return self.adapter.dict2record(result)
        else:
            return None

    async def update_one(self, query: Dict[str, Any], updated: T) -> Optional[T]:
        result = await self.common_storage.update_one(
            query, self.adapter.record2dict(updated)
        )
        if result:
            return self.adapter.dict2record(result)
        return None


class DataclassCommonStorageAdapter(Generic[T], CommonStorageAdapter[T]):
    """A `CommonStorageAdapter` for `dataclasses`.

    Keys which are not fields of the dataclass (like the "__id" added by UnQLite) are dropped when building records.

    ..warning:: `dataclasses` does not check the actual data type, only the fields given.
    """

    def __init__(self, datacls: Type[T]) -> None:
        assert dataclasses.is_dataclass(datacls), "datacls should be a dataclass"
        self.datacls = datacls
        self.field_names = {f.name for f in dataclasses.fields(datacls)}
        super().__init__()

    def dict2record(self, d: Dict[str, Any]) -> T:
        kwargs = {k: v for k, v in d.items() if k in self.field_names}
        return self.datacls(**kwargs)  # type: ignore # it should work

    def record2dict(self, record: T) -> Dict[str, Any]:
        return dataclasses.asdict(record)


def _decode(value: Any) -> Any:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


class UnQLiteStorage(CommonStorage):
    """An implementation of `CommonStorage` for one collection of `unqlite.UnQLite`.

    .. note:: The API of `unqlite-python` is synchrounous.
        Every operation is run in the shared executor from `accountbox.utils.global_executor`,
        which also serializes all database access on one thread.

    .. note:: Documents read back are normalized: `bytes` keys and values are decoded as UTF-8.

    Related:

    - [unqlite-python API documentation](https://unqlite-python.readthedocs.io/en/latest/api.html)
    """

    def __init__(self, instance: UnQLite, collection_name: str) -> None:
        self.instance = instance
        self.collection_name = collection_name
        super().__init__()

    @property
    def new_collection(self) -> Collection:
        """Return a new collection.

        ..note:: `unqlite.Collection` keeps cursor-like state, a fresh one is used for each operation.
        """
        return self.instance.collection(self.collection_name)

    def _run(self, fn, *args) -> Awaitable[Any]:
        return asyncio.get_running_loop().run_in_executor(
            global_executor.get(), fn, *args
        )

    def initialize_sync(self) -> None:
        """Create the collection if it does not exist, without thread pool."""
        coll = self.new_collection
        if not coll.exists():
            coll.create()
            self.instance.commit()

    def initialize(self) -> Awaitable[None]:
        return self._run(self.initialize_sync)

    def store_sync(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Store the `record` without thread pool."""
        self.new_collection.store(record)
        self.instance.commit()
        return record

    def store(self, record: Dict[str, Any]) -> Awaitable[Dict[str, Any]]:
        return self._run(self.store_sync, record)

    @classmethod
    def normalize(cls, doc: Dict[Any, Any]) -> Dict[str, Any]:
        """Decode `bytes` keys and values of `doc`."""
        return {_decode(k): _decode(v) for k, v in doc.items()}

    @classmethod
    def doc_match(cls, doc: Dict[str, Any], match: Dict[str, Any]) -> bool:
        """Check if `doc` completely matchs `match`."""
        for k in match:
            if k not in doc or doc[k] != match[k]:
                return False
        return True

    def find_sync(self, query: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Return all documents matching `query`, without thread pool."""
        result: List[Dict[str, Any]] = []
        for doc in self.new_collection.all() or []:
            doc = self.normalize(doc)
            if self.doc_match(doc, query):
                result.append(doc)
        return result

    async def find(self, query: Dict[str, Any]) -> AsyncIterable[Dict[str, Any]]:
        for doc in await self._run(self.find_sync, query):
            yield doc

    async def find_one(self, query: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        async for doc in self.find(query):
            return doc
        return None

    def update_sync(self, doc_id: int, updated: Dict[str, Any]) -> None:
        """Replace the document `doc_id` with `updated`, without thread pool."""
        self.new_collection.update(doc_id, updated)
        self.instance.commit()

    async def update_one(
        self, query: Dict[str, Any], updated: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        doc = await self.find_one(query)
        if not doc:
            return None
        await self._run(self.update_sync, doc["__id"], updated)
        return updated

