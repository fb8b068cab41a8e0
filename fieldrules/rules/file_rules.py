"""Validation rules for uploaded files.

Files are duck-typed: anything exposing a byte `size` counts, with the name
taken from `filename` (FastAPI/Starlette UploadFile) or `name`, and the MIME
type from `content_type` or `type`. A rule given a list of files passes only
if every file passes.

Size parameters take an optional unit: "100", "512KB", "1MB", "2GB".
"""

from fieldrules.rules.common_rules import result
from fieldrules.utils.params import parse_file_size, require_param, to_range
from fieldrules.utils.rule_parsing import split_params


def is_file_like(obj) -> bool:
    return obj is not None and not isinstance(obj, (str, bytes)) and hasattr(obj, "size")


def files_of(value) -> list:
    """Normalize a single file or a collection of files to a list."""
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _file_name(f) -> str:
    return getattr(f, "filename", None) or getattr(f, "name", None) or ""


def _file_type(f) -> str:
    return getattr(f, "content_type", None) or getattr(f, "type", None) or ""


def is_file(value, param=None) -> dict:
    """file — value is a file, or a non-empty list of files."""
    files = files_of(value)
    return result(bool(files) and all(is_file_like(f) for f in files), value)


def max_file_size(value, param=None) -> dict:
    """maxFileSize:SIZE — every file is at most SIZE. Non-file entries are ignored."""
    limit = parse_file_size("maxFileSize", param)
    files = files_of(value)
    if not files:
        return result(False, value)
    passes = all(f.size <= limit for f in files if is_file_like(f))
    return result(passes, files)


def min_file_size(value, param=None) -> dict:
    """minFileSize:SIZE — every entry is a file of at least SIZE."""
    limit = parse_file_size("minFileSize", param)
    files = files_of(value)
    if not files:
        return result(False, value)
    passes = all(is_file_like(f) and f.size >= limit for f in files)
    return result(passes, files)


def file_between(value, param=None) -> dict:
    """fileBetween:MIN,MAX — every file size within [MIN, MAX]."""
    low, high = to_range("fileBetween", param, convert=parse_file_size)
    files = files_of(value)
    if not files:
        return result(False, value)
    passes = all(is_file_like(f) and low <= f.size <= high for f in files)
    return result(passes, value)


def _mime_allowed(f, allowed: str) -> bool:
    allowed = allowed.replace(" ", "")
    name = _file_name(f)
    mime = _file_type(f)
    # Unknown type can't be checked, let it through like a wildcard
    if allowed in ("", "*") or not mime:
        return True
    if allowed.endswith("/*"):
        return mime.startswith(allowed[:-2])
    if allowed.startswith("*."):
        return name.endswith(allowed[2:])
    if allowed.startswith("."):
        return name.endswith(allowed)
    return mime == allowed


def mimes(value, param=None) -> dict:
    """mimes:LIST — every file matches one of the allowed types.

    Entries can be "*", a MIME type ("application/pdf"), a group ("image/*")
    or an extension (".pdf", "*.pdf").
    """
    allowed = split_params(require_param("mimes", param))
    files = files_of(value)
    if not files:
        return result(False, value)
    passes = all(
        is_file_like(f) and any(_mime_allowed(f, a) for a in allowed) for f in files
    )
    return result(passes, value)
