"""HCL text generation helpers."""

import re
from typing import Any, Dict, Hashable, Iterable, Set, Tuple

_UNDERSCORE_CHARS = re.compile(r'[./, ]')
_STRIP_CHARS = re.compile(r'[\\()?]')
# Whatever is left that Terraform would still reject
_INVALID_CHARS = re.compile(r'[^A-Za-z0-9_-]')


class Expression(str):
    """Raw HCL expression (e.g. a resource reference), rendered unquoted."""


def reference(resource_type: str, name: str, attribute: str = '') -> Expression:
    """Build a reference such as ``rollbar_team.ops.id``."""
    address = f'{resource_type}.{name}'
    return Expression(f'{address}.{attribute}' if attribute else address)


def hcl_string(value: str) -> str:
    """Escape and quote a string for HCL, including template sequences."""
    escaped = (
        value.replace('\\', '\\\\')
        .replace('"', '\\"')
        .replace('\n', '\\n')
        .replace('${', '$${')
        .replace('%{', '%%{')
    )
    return f'"{escaped}"'


def hcl_value(value: Any) -> str:
    """Convert a Python value to its HCL representation."""
    if isinstance(value, Expression):
        return str(value)
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return hcl_string(value)
    if isinstance(value, (list, tuple)):
        return '[' + ', '.join(hcl_value(v) for v in value) + ']'
    if value is None:
        return 'null'
    return hcl_string(str(value))


def render_block(header: str, attrs: Dict[str, Any]) -> str:
    """Render ``header { key = value ... }``; ``None`` attributes are omitted."""
    lines = [f'{header} {{']
    for key, value in attrs.items():
        if value is None:
            continue
        lines.append(f'  {key} = {hcl_value(value)}')
    lines.append('}')
    return '\n'.join(lines) + '\n\n'


def render_resource(resource_type: str, name: str, attrs: Dict[str, Any]) -> str:
    """Render a single ``resource`` block followed by a blank line."""
    return render_block(f'resource "{resource_type}" "{name}"', attrs)


def sanitize_identifier(name: str) -> str:
    """Turn a display name into a valid Terraform identifier.

    Dots, slashes, commas and spaces become underscores, parentheses,
    question marks and backslashes are dropped, and anything else outside
    ``[A-Za-z0-9_-]`` becomes an underscore. Case is preserved.
    """
    identifier = _UNDERSCORE_CHARS.sub('_', name)
    identifier = _STRIP_CHARS.sub('', identifier)
    identifier = _INVALID_CHARS.sub('_', identifier)

    if not identifier:
        return 'unnamed'
    # Identifiers must start with a letter or underscore
    if identifier[0].isdigit() or identifier[0] == '-':
        identifier = '_' + identifier
    return identifier


def unique_identifiers(pairs: Iterable[Tuple[Hashable, str]]) -> Dict[Hashable, str]:
    """Map each key to a sanitized identifier, suffixing duplicates.

    The first occurrence keeps the plain identifier, later ones get ``_2``,
    ``_3`` and so on, in input order.
    """
    result: Dict[Hashable, str] = {}
    taken: Set[str] = set()
    for key, name in pairs:
        base = sanitize_identifier(name)
        identifier = base
        counter = 1
        while identifier in taken:
            counter += 1
            identifier = f'{base}_{counter}'
        taken.add(identifier)
        result[key] = identifier
    return result
