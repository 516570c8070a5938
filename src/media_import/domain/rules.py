import re
from collections.abc import Iterable, Mapping
from typing import Any, Callable
from urllib.parse import unquote, urlsplit

from pathvalidate import sanitize_filename as lib_sanitize

from src.media_import.domain.errors import InvalidInputFormat, InvalidUrl, UnknownFileCategory
from src.media_import.domain.models import (
    Fingerprint,
    InlinePayloadReference,
    MediaIdReference,
    MediaLookupReference,
    MediaUrlReference,
    ReferenceDescriptor,
)

INLINE_PAYLOAD_PATTERN = re.compile(r"data:([a-z]+/[a-z]+);base64,([a-zA-Z0-9+/=]+)")

ALLOWED_AUDIOS = frozenset({"mp3", "wav", "ogg"})
ALLOWED_IMAGES = frozenset({"png", "gif", "jpg", "jpeg", "svg", "bmp", "tif", "tiff"})
ALLOWED_VIDEOS = frozenset({"mp4", "avi"})

FileTypeChecker = Callable[[str], bool]

FILE_TYPE_CHECKERS: dict[str, FileTypeChecker] = {
    "any": lambda ext: True,
    "audios": lambda ext: ext in ALLOWED_AUDIOS,
    "files": lambda ext: True,
    "images": lambda ext: ext in ALLOWED_IMAGES,
    "videos": lambda ext: ext in ALLOWED_VIDEOS,
}

# Accepted keys of a structured descriptor, mapped to MediaLookupReference fields.
_LOOKUP_KEYS = {
    "id": "id",
    "hash": "hash",
    "name": "name",
    "url": "url",
    "alternativeText": "alternative_text",
    "alternative_text": "alternative_text",
    "altText": "alternative_text",
    "alt_text": "alternative_text",
    "caption": "caption",
}


def get_file_type_checker(category: str) -> FileTypeChecker:
    checker = FILE_TYPE_CHECKERS.get(category)
    if checker is None:
        raise UnknownFileCategory(category)
    return checker


def validate_file_categories(categories: Iterable[str]) -> tuple[str, ...]:
    validated = tuple(categories)
    for category in validated:
        get_file_type_checker(category)
    return validated


def is_extension_allowed(extension: str, allowed_categories: Iterable[str]) -> bool:
    checkers = [get_file_type_checker(category) for category in allowed_categories]
    ext = extension.lower()
    return any(checker(ext) for checker in checkers)


def fingerprint_url(raw_url: str) -> Fingerprint:
    try:
        parsed = urlsplit(unquote(raw_url))
    except ValueError as exc:
        raise InvalidUrl(raw_url, str(exc)) from exc
    if not parsed.scheme or not parsed.netloc:
        raise InvalidUrl(raw_url, "scheme and host are required")

    path = parsed.path
    name = path.strip("/").replace("/", "-")
    if not name:
        raise InvalidUrl(raw_url, "path has no file name")

    last_segment = path.split("/")[-1]
    if "." in last_segment:
        stem, _, suffix = last_segment.rpartition(".")
        extension = suffix.lower()
    else:
        stem, extension = last_segment, ""

    return Fingerprint(
        hash=stem,
        name=name,
        extension=extension,
    )


def sanitize_filename(name: str) -> str:
    safe_name = lib_sanitize(name, replacement_text="_")
    if not safe_name:
        return "untitled"
    return safe_name


def make_inline_filename(mime_type: str, epoch_millis: int) -> str:
    extension = mime_type.split("/")[-1]
    return f"image-{epoch_millis}.{extension}"


def is_inline_payload(raw: Any) -> bool:
    return isinstance(raw, str) and INLINE_PAYLOAD_PATTERN.fullmatch(raw) is not None


def parse_reference(raw: Any) -> ReferenceDescriptor:
    """Turn a caller-supplied reference into exactly one descriptor variant.

    Inline payloads are detected first; after that numbers become ids, strings
    become urls and mappings become structured lookups. Anything else raises
    InvalidInputFormat.
    """
    if isinstance(
        raw, (MediaIdReference, MediaUrlReference, MediaLookupReference, InlinePayloadReference)
    ):
        return raw

    if isinstance(raw, str):
        if is_inline_payload(raw):
            mime_type, _, payload = raw[len("data:"):].partition(";base64,")
            return InlinePayloadReference(mime_type=mime_type, payload=payload)
        return MediaUrlReference(url=raw)

    if isinstance(raw, bool):
        raise _invalid_format(raw)
    if isinstance(raw, int):
        return MediaIdReference(id=raw)
    if isinstance(raw, float) and raw.is_integer():
        return MediaIdReference(id=int(raw))

    if isinstance(raw, Mapping):
        return _parse_lookup(raw)

    raise _invalid_format(raw)


def _parse_lookup(raw: Mapping) -> MediaLookupReference:
    fields: dict[str, Any] = {}
    for key, value in raw.items():
        field_name = _LOOKUP_KEYS.get(key)
        if field_name is None or value is None:
            continue
        if field_name == "id":
            fields["id"] = _coerce_id(value)
        elif isinstance(value, str):
            fields[field_name] = value
        else:
            raise InvalidInputFormat(
                f"Field '{key}' of a media descriptor must be a string, got '{type(value).__name__}'."
            )
    return MediaLookupReference(**fields)


def _coerce_id(value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidInputFormat("Media id must be an integer, got 'bool'.")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise InvalidInputFormat(f"Media id must be an integer, got {value!r}.")


def _invalid_format(raw: Any) -> InvalidInputFormat:
    return InvalidInputFormat(
        f"Invalid data format '{type(raw).__name__}' to import media. "
        "Only 'str', 'int' and mapping values are accepted."
    )
