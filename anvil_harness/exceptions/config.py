class ConfigurationError(ValueError):
    """Generic error thrown if there was an error while reading a configuration file."""


class NodeConfigurationError(ConfigurationError):
    """An error occurred while validating the node section of a configuration file."""


class UnknownOptionError(NodeConfigurationError):
    """The configuration names an anvil option we have no builder for."""
