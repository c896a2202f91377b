from __future__ import annotations

from typing import Any, Iterable


def _normalize_error_path(location_parts: Iterable[Any]) -> str:
    parts = [str(part) for part in location_parts]
    if not parts:
        return "(root)"
    return ".".join(parts)


def _build_summary(*, unknown_fields: list[str], error_count: int) -> str:
    if unknown_fields:
        noun = "option" if len(unknown_fields) == 1 else "options"
        fields = ", ".join(unknown_fields)
        return f"Validation failed: unknown {noun}: {fields}."

    noun = "option" if error_count == 1 else "options"
    return f"Validation failed for {error_count} {noun}."


def format_validation_error_details(errors: list[dict[str, Any]]) -> dict[str, Any]:
    field_errors: list[dict[str, str]] = []
    unknown_fields: list[str] = []

    for error in errors:
        raw_loc = error.get("loc")
        if isinstance(raw_loc, (list, tuple)):
            path = _normalize_error_path(raw_loc)
        elif raw_loc is None:
            path = "(root)"
        else:
            path = _normalize_error_path([raw_loc])

        error_type = str(error.get("type", "validation_error"))
        message = str(error.get("msg", "Invalid value"))

        field_errors.append(
            {
                "path": path,
                "message": message,
                "errorType": error_type,
            }
        )

        if error_type == "extra_forbidden" and path not in unknown_fields:
            unknown_fields.append(path)

    return {
        "summary": _build_summary(unknown_fields=unknown_fields, error_count=len(field_errors)),
        "unknownFields": unknown_fields,
        "fieldErrors": field_errors,
    }
