"""Route template parsing and composition.

A route path is composed from up to three templates: the culture prefix
(localized variants only), the controller template, and the action
template. An action template starting with ``/`` is absolute and
replaces the controller template.
"""

from routelocale.errors import ConfigurationError
from routelocale.routing.params import CONVERTERS
from routelocale.routing.route import PathSegment


def parse_path(path: str) -> list[PathSegment]:
    """Parse a route path string into segments.

    Examples::

        "/users"          -> [PathSegment("users")]
        "/users/{id}"     -> [PathSegment("users"), PathSegment("{id}", is_param=True, ...)]
        "/users/{id:int}" -> [PathSegment("{id:int}", is_param=True, param_type="int")]
        "/files/{path:path}" -> [PathSegment("{path:path}", is_param=True, param_type="path")]

    Raises ``ConfigurationError`` for Flask-style ``<param>`` segments and
    unknown converters.
    """
    segments: list[PathSegment] = []
    for part in path.strip("/").split("/"):
        if not part:
            continue
        if part.startswith("<") and part.endswith(">"):
            msg = (
                f"Route template {path!r} uses <param> syntax. "
                "Use {param} for path parameters."
            )
            raise ConfigurationError(msg)
        if part.startswith("{") and part.endswith("}"):
            inner = part[1:-1]
            if ":" in inner:
                param_name, param_type = inner.split(":", 1)
            else:
                param_name = inner
                param_type = "str"
            if param_type not in CONVERTERS:
                msg = (
                    f"Unknown converter {param_type!r} in route template {path!r}. "
                    f"Available: {', '.join(sorted(CONVERTERS))}"
                )
                raise ConfigurationError(msg)
            segments.append(
                PathSegment(
                    value=part,
                    is_param=True,
                    param_name=param_name,
                    param_type=param_type,
                )
            )
        else:
            segments.append(PathSegment(value=part))
    return segments


def template_params(template: str) -> dict[str, str]:
    """Return ``{param_name: param_type}`` for every parameter in *template*."""
    return {
        seg.param_name: seg.param_type
        for seg in parse_path(template)
        if seg.is_param and seg.param_name
    }


def combine_templates(
    prefix: str | None,
    controller_template: str,
    action_template: str,
) -> str:
    """Compose a route path from its templates.

    ``combine_templates("de", "Heim", "Buch")`` -> ``"/de/Heim/Buch"``
    ``combine_templates(None, "Home", "/about")`` -> ``"/about"``
    """
    parts: list[str] = []
    if prefix:
        parts.append(prefix.strip("/"))
    if not action_template.startswith("/"):
        parts.append(controller_template.strip("/"))
    parts.append(action_template.strip("/"))
    path = "/".join(p for p in parts if p)
    return f"/{path}"
