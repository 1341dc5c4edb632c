import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type

from bson import ObjectId
from pydantic import BaseModel, ValidationError
from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.database import Database
from pymongo.errors import PyMongoError

from config import DATABASE_URL, DATABASE_NAME
from errors import DocumentValidationError, WriteError

logger = logging.getLogger(__name__)

ORDER_ASC = [("order", 1)]


@lru_cache(maxsize=1)
def get_client() -> MongoClient:
    return MongoClient(DATABASE_URL)


def get_db() -> Database:
    """Request dependency handing each route the shared database."""
    return get_client()[DATABASE_NAME]


def serialize_doc(doc: Optional[dict]) -> Optional[dict]:
    if not doc:
        return doc
    d = dict(doc)
    _id = d.get("_id")
    if isinstance(_id, ObjectId):
        d["_id"] = str(_id)
    return d


def build_document(model: Type[BaseModel], data: Dict[str, Any]) -> Dict[str, Any]:
    try:
        return model(**data).model_dump()
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(part) for part in err["loc"]) or "document"
        raise DocumentValidationError(f"{model.__name__} validation failed: {field}: {err['msg']}") from e


def _largest_field_bytes(doc: Dict[str, Any], fields: Sequence[str]) -> int:
    # UTF-8 encoded size, as stored in BSON
    sizes = [len(doc[f].encode("utf-8")) for f in fields if isinstance(doc.get(f), str)]
    return max(sizes, default=0)


def replace_collection(
    collection: Collection,
    items: Sequence[Dict[str, Any]],
    model: Type[BaseModel],
    warn_bytes: Optional[int] = None,
    size_fields: Sequence[str] = (),
) -> int:
    """Replace every document in ``collection`` with ``items``.

    Each item is validated against ``model`` and stamped with an ``order``
    equal to its position.  The delete and the insert are separate writes:
    a failure in between leaves the collection empty, and two concurrent
    replaces of the same collection may interleave.

    Items whose largest ``size_fields`` value exceeds ``warn_bytes`` are
    logged as a warning but still written.
    """
    docs = []
    for index, item in enumerate(items):
        doc = build_document(model, {**item, "order": index})
        if warn_bytes is not None:
            size = _largest_field_bytes(doc, size_fields)
            if size > warn_bytes:
                logger.warning(
                    "Item at index %d for %s is very large (%dMB) and may fail to save",
                    index, collection.name, round(size / (1024 * 1024)),
                )
        docs.append(doc)

    try:
        collection.delete_many({})
        if docs:
            collection.insert_many(docs)
    except PyMongoError as e:
        logger.error("Database error for %s: %s", collection.name, e)
        raise WriteError(str(e)) from e
    return len(docs)


def list_documents(
    collection: Collection,
    sort: Optional[List[tuple]] = None,
    limit: Optional[int] = None,
) -> List[Dict[str, Any]]:
    cursor = collection.find({})
    if sort:
        cursor = cursor.sort(sort)
    if limit:
        cursor = cursor.limit(limit)
    return list(cursor)


def insert_document(collection: Collection, model: Type[BaseModel], data: Dict[str, Any]) -> str:
    doc = build_document(model, data)
    try:
        result = collection.insert_one(doc)
    except PyMongoError as e:
        logger.error("Database error for %s: %s", collection.name, e)
        raise WriteError(str(e)) from e
    return str(result.inserted_id)


def delete_by_id(collection: Collection, doc_id: str) -> int:
    # Malformed ids raise bson.errors.InvalidId
    try:
        result = collection.delete_one({"_id": ObjectId(doc_id)})
    except PyMongoError as e:
        logger.error("Database error for %s: %s", collection.name, e)
        raise WriteError(str(e)) from e
    return result.deleted_count


def find_or_create_singleton(collection: Collection, model: Type[BaseModel], defaults: Dict[str, Any]) -> Dict[str, Any]:
    doc = collection.find_one({})
    if doc is None:
        try:
            inserted_id = collection.insert_one(build_document(model, defaults)).inserted_id
            doc = collection.find_one({"_id": inserted_id})
        except PyMongoError as e:
            logger.error("Database error for %s: %s", collection.name, e)
            raise WriteError(str(e)) from e
        logger.info("Created default %s record", collection.name)
    return doc


def upsert_singleton(
    collection: Collection, model: Type[BaseModel], fields: Dict[str, Any]
) -> Tuple[Dict[str, Any], bool]:
    """Create the singleton from ``fields`` or ``$set``-merge them into it.

    Returns the stored record and whether it was created.  Concurrent
    updates are last-write-wins.
    """
    try:
        if collection.find_one({}) is None:
            inserted_id = collection.insert_one(build_document(model, fields)).inserted_id
            return collection.find_one({"_id": inserted_id}), True
        collection.update_one({}, {"$set": fields})
        return collection.find_one({}), False
    except PyMongoError as e:
        logger.error("Database error for %s: %s", collection.name, e)
        raise WriteError(str(e)) from e
