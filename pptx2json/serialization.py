import typing
from dataclasses import fields, is_dataclass


def to_camel_case(name: str) -> str:
    """``border_stroke_dasharray`` -> ``borderStrokeDasharray``."""
    head, *tail = name.split("_")
    return head + "".join(part[:1].upper() + part[1:] for part in tail)


def _serialize_for_json(value: typing.Any) -> typing.Any:
    if is_dataclass(value) and not isinstance(value, type):
        result = {}
        for item in fields(value):
            item_value = getattr(value, item.name)
            if item_value is None:
                continue
            result[to_camel_case(item.name)] = _serialize_for_json(item_value)
        return result
    if isinstance(value, dict):
        return {str(key): _serialize_for_json(val) for key, val in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize_for_json(item) for item in value]
    return value


def serialize_presentation(value: typing.Any) -> dict:
    """
    Serialize a Presentation (or any part of it) to JSON-compatible data.

    Dataclass fields become camelCase keys; fields set to None are omitted,
    so an unresolved position is absent rather than zero.
    """
    serialized = _serialize_for_json(value)
    if isinstance(serialized, dict):
        return serialized
    return {"value": serialized}
