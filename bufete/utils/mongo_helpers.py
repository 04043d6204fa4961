# bufete/utils/mongo_helpers.py
import enum
from datetime import date, datetime
from bson import ObjectId
from pydantic import BaseModel

def fix_mongo_id(doc):
    """
    Quita el _id interno de Mongo (o lo pasa a string si viene anidado) para que
    FastAPI pueda serializar el documento. Soporta dicts, listas y anidados.
    """
    if not doc:
        return doc

    if isinstance(doc, list):
        return [fix_mongo_id(d) for d in doc]

    if isinstance(doc, dict):
        new_doc = {}
        for k, v in doc.items():
            if k == "_id":
                continue
            if isinstance(v, ObjectId):
                new_doc[k] = str(v)
            else:
                new_doc[k] = fix_mongo_id(v)
        return new_doc

    return doc

def _to_bson_value(v):
    # BSON no tiene tipo "fecha sin hora": se guarda como YYYY-MM-DD
    if isinstance(v, datetime):
        return v
    if isinstance(v, date):
        return v.isoformat()
    if isinstance(v, enum.Enum):
        return v.value
    if isinstance(v, list):
        return [_to_bson_value(x) for x in v]
    if isinstance(v, dict):
        return {k: _to_bson_value(x) for k, x in v.items()}
    return v

def to_mongo(model: BaseModel) -> dict:
    """Modelo pydantic -> dict listo para insert/update en Motor."""
    return _to_bson_value(model.model_dump())
