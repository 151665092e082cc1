"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, lowercase_urls=True)
    """

    # Log the compiled route table when the app freezes
    debug: bool = False

    # Static segments match regardless of case unless set
    case_sensitive: bool = False

    # url_for() lowercases static segments (parameters are left alone)
    lowercase_urls: bool = False
