from ._version import __version__
from .config import Configuration, PropertyDefinition, PropertyDefinitions

__all__ = ["__version__", "Configuration", "PropertyDefinition", "PropertyDefinitions"]
