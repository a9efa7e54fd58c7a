"""URL pattern placeholders and parameter conversion.

Built-in converters for pattern segments like ``{id:int}``. Patterns are
only ever *expanded* into URLs here; matching URLs back to states belongs
to whatever history layer drives the registry.
"""

import re
from dataclasses import dataclass
from typing import Any

from waypoint.errors import ConfigurationError, UrlBuildError

# (regex_pattern, python_type) for each supported converter
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "float": (r"\d+(?:\.\d+)?", float),
    "path": (r".+", str),
}


@dataclass(frozen=True, slots=True)
class PatternSegment:
    """A parsed segment of a URL pattern.

    Static:  ``/articles``     (is_param=False)
    Param:   ``/{slug}``       (is_param=True, param_name="slug")
    Typed:   ``/{id:int}``     (is_param=True, param_name="id", param_type="int")
    """

    value: str
    is_param: bool = False
    param_name: str | None = None
    param_type: str = "str"


def parse_pattern(pattern: str) -> tuple[PatternSegment, ...]:
    """Parse a URL pattern string into segments.

    Examples::

        "/articles"           -> (PatternSegment("articles"),)
        "/articles/{id:int}"  -> (PatternSegment("articles"), PatternSegment("{id:int}", is_param=True, ...))

    Raises ``ConfigurationError`` for an unknown converter name.
    """
    segments: list[PatternSegment] = []
    for part in pattern.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name = inner
                param_type = "str"
            if param_type not in CONVERTERS:
                msg = (
                    f"Unknown converter {param_type!r} in URL pattern {pattern!r}. "
                    f"Available converters: {', '.join(sorted(CONVERTERS))}"
                )
                raise ConfigurationError(msg)
            segments.append(
                PatternSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            segments.append(PatternSegment(value=part))
    return tuple(segments)


def format_param(segment: PatternSegment, params: dict[str, Any]) -> str:
    """Render one placeholder from *params*.

    Raises ``UrlBuildError`` if the parameter is missing or its string form
    does not satisfy the converter pattern.
    """
    name = segment.param_name or ""
    if name not in params or params[name] is None:
        msg = f"Missing URL parameter {name!r} for placeholder {segment.value!r}"
        raise UrlBuildError(msg)

    value = str(params[name])
    pattern, _ = CONVERTERS[segment.param_type]
    if not re.fullmatch(pattern, value):
        msg = f"Value {value!r} for URL parameter {name!r} is not a valid {segment.param_type}"
        raise UrlBuildError(msg)
    return value
