"""Path parameter parsing and type conversion.

Built-in converters for route path segments like ``{id:int}``.
"""


# (regex_pattern, python_type) for each supported converter
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "float": (r"\d+(?:\.\d+)?", float),
    "path": (r".+", str),
}


def convert_param(value: str, param_type: str) -> str | int | float:
    """Convert a captured path parameter string to the target type.

    Raises ``ValueError`` if the string cannot be converted.
    Raises ``KeyError`` if *param_type* is not a registered converter.
    """
    _, target_type = CONVERTERS[param_type]
    return target_type(value)


def convert_params(
    params: dict[str, str], types: dict[str, str]
) -> dict[str, str | int | float]:
    """Convert every captured parameter using the types declared in its template."""
    return {
        name: convert_param(value, types.get(name, "str"))
        for name, value in params.items()
    }
