"""DSL inspectors: auto-registered on import."""

from camel_inspect.scanner.inspectors import (
    jvm_dsl,  # noqa: F401
    xml_dsl,  # noqa: F401
    yaml_dsl,  # noqa: F401
)
