"""
Per-file upload header rules.

Headers are configured as JSON only, either a flat object applied to
every file::

    {"Cache-Control": "max-age=3600"}

or a rule object computing headers per key::

    {
      "default": {"Cache-Control": "max-age=3600"},
      "rules": [
        {"match": "\\\\.html$", "headers": {"Cache-Control": "no-cache"}}
      ]
    }

Every rule whose pattern matches the key is merged over ``default`` in
order, later rules winning.
"""
import json
import mimetypes
import re
from typing import Dict, List, Pattern, Tuple

from ..exceptions import ConfigurationError
from .validation import validate_regex

# HTTP header name (lowercase) -> S3 PutObject parameter
_PUT_OBJECT_PARAMS = {
    "cache-control": "CacheControl",
    "content-type": "ContentType",
    "content-disposition": "ContentDisposition",
    "content-encoding": "ContentEncoding",
    "content-language": "ContentLanguage",
    "expires": "Expires",
    "x-amz-acl": "ACL",
    "x-oss-object-acl": "ACL",
    "x-amz-storage-class": "StorageClass",
    "x-oss-storage-class": "StorageClass",
    "x-amz-website-redirect-location": "WebsiteRedirectLocation",
}

_METADATA_PREFIXES = ("x-amz-meta-", "x-oss-meta-")


def _check_header_map(headers, where: str) -> Dict[str, str]:
    if not isinstance(headers, dict):
        raise ConfigurationError(f"headers: {where} must be a JSON object")
    for name, value in headers.items():
        if not isinstance(value, str):
            raise ConfigurationError(
                f"headers: value of {name!r} in {where} must be a string, got {type(value).__name__}"
            )
        lowered = name.lower()
        if lowered not in _PUT_OBJECT_PARAMS and not lowered.startswith(_METADATA_PREFIXES):
            raise ConfigurationError(f"headers: unsupported header {name!r} in {where}")
    return dict(headers)


class HeaderProvider:
    """Computes the upload headers of each file key."""

    def __init__(self, default: Dict[str, str] = None, rules: List[Tuple[Pattern, Dict[str, str]]] = None):
        self.default = dict(default or {})
        self.rules = list(rules or [])

    @classmethod
    def parse(cls, text: str) -> "HeaderProvider":
        """
        Build a provider from the ``headers`` configuration value.

        Args:
            text: JSON text, empty for no headers

        Returns:
            HeaderProvider instance

        Raises:
            ConfigurationError: For malformed JSON, unsupported header
                names, non-string values or invalid rule patterns
        """
        text = (text or "").strip()
        if not text:
            return cls()

        try:
            spec = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"headers: invalid JSON: {e}") from e

        if not isinstance(spec, dict):
            raise ConfigurationError("headers: must be a JSON object")

        if not isinstance(spec.get("rules"), list):
            return cls(default=_check_header_map(spec, "headers"))

        unknown = set(spec) - {"default", "rules"}
        if unknown:
            raise ConfigurationError(
                f"headers: unexpected key(s) next to 'rules': {', '.join(sorted(unknown))}"
            )

        default = _check_header_map(spec.get("default", {}), "'default'")
        rules = []
        for index, rule in enumerate(spec["rules"]):
            where = f"rule #{index + 1}"
            if not isinstance(rule, dict) or not isinstance(rule.get("match"), str):
                raise ConfigurationError(f"headers: {where} needs a string 'match' pattern")
            is_valid, error = validate_regex(rule["match"])
            if not is_valid:
                raise ConfigurationError(f"headers: {where}: {error}")
            rules.append((re.compile(rule["match"]), _check_header_map(rule.get("headers", {}), where)))

        return cls(default=default, rules=rules)

    def headers_for(self, key: str) -> Dict[str, str]:
        """Return the merged headers of *key*."""
        headers = dict(self.default)
        for pattern, rule_headers in self.rules:
            if pattern.search(key):
                headers.update(rule_headers)
        return headers


def to_put_object_args(headers: Dict[str, str], key: str = None) -> Dict:
    """
    Translate HTTP header names into S3 ``PutObject`` keyword arguments.

    Args:
        headers: Header mapping as produced by :class:`HeaderProvider`
        key: Object key; when given and no ``Content-Type`` is set, the
            type is guessed from its extension

    Returns:
        Dictionary of PutObject parameters
    """
    args = {}
    metadata = {}
    for name, value in headers.items():
        lowered = name.lower()
        param = _PUT_OBJECT_PARAMS.get(lowered)
        if param:
            args[param] = value
            continue
        for prefix in _METADATA_PREFIXES:
            if lowered.startswith(prefix):
                metadata[lowered[len(prefix):]] = value
                break
        else:
            raise ConfigurationError(f"headers: unsupported header {name!r}")

    if metadata:
        args["Metadata"] = metadata

    if key is not None and "ContentType" not in args:
        guessed, _ = mimetypes.guess_type(key)
        if guessed:
            args["ContentType"] = guessed

    return args
