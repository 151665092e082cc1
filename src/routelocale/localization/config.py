"""Localization configuration."""

from dataclasses import dataclass

from routelocale.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class LocalizationConfig:
    """Which cultures routes can be localized into. Immutable after creation.

    ::

        config = LocalizationConfig(accepted_cultures=("en", "de"), default_culture="en")

    Raises ``ConfigurationError`` when the culture list is empty, contains
    duplicates, or does not contain ``default_culture``.
    """

    accepted_cultures: tuple[str, ...] = ()
    default_culture: str | None = None

    # Localized paths start with the culture ("/de/Heim/Buch")
    add_culture_as_route_prefix: bool = True

    def __post_init__(self) -> None:
        cultures = tuple(self.accepted_cultures)
        object.__setattr__(self, "accepted_cultures", cultures)
        if not cultures:
            msg = "LocalizationConfig needs at least one accepted culture."
            raise ConfigurationError(msg)
        if len(set(cultures)) != len(cultures):
            msg = f"Duplicate cultures in accepted_cultures: {cultures!r}"
            raise ConfigurationError(msg)
        if self.default_culture is not None and self.default_culture not in cultures:
            msg = (
                f"default_culture {self.default_culture!r} is not one of "
                f"the accepted cultures {cultures!r}"
            )
            raise ConfigurationError(msg)
