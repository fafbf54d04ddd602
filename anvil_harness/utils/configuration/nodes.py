from pathlib import Path
from typing import Any, List, Mapping, Union

import structlog
import yaml

from anvil_harness.constants import DEFAULT_ANVIL_BINARY
from anvil_harness.exceptions.config import NodeConfigurationError, UnknownOptionError
from anvil_harness.node.options import OPTION_BUILDERS, OPTION_TYPE, Option
from anvil_harness.utils.configuration.base import ConfigMapping

log = structlog.get_logger(__name__)


class NodeConfig(ConfigMapping):
    """Anvil node config settings interface.

    Thin wrapper around the 'node' section of a loaded configuration .yaml file.

    Example configuration::

        >node.yaml
        node:
          executable: /opt/foundry/bin/anvil
          options:
            port: 8545
            chain-id: 13451
            fork-url: https://rpc.example
            silent: true
            ipc:

    Option names are anvil's long flag names without the leading dashes.
    Switches are enabled by `true` or an empty value and omitted when
    `false`. ``ipc`` takes an optional path.
    """

    CONFIGURATION_ERROR = NodeConfigurationError

    def __init__(self, loaded_definition: Mapping):
        super().__init__((loaded_definition or {}).get("node"))
        self.validate()

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "NodeConfig":
        with Path(path).open() as config_file:
            loaded = yaml.safe_load(config_file)
        cls.assert_option(
            isinstance(loaded, Mapping), f"Configuration file {path} must contain a mapping!"
        )
        return cls(loaded)

    @property
    def executable(self) -> str:
        return str(self.dict.get("executable") or DEFAULT_ANVIL_BINARY)

    @property
    def raw_options(self) -> Mapping[str, Any]:
        return self.dict.get("options") or {}

    @property
    def options(self) -> List[Option]:
        """Typed options, in the order they appear in the configuration."""
        options = []
        for name, value in self.raw_options.items():
            spec = OPTION_BUILDERS[name]
            if spec.kind is OPTION_TYPE.SWITCH:
                if value is False:
                    continue
                options.append(spec.builder())
            elif spec.kind is OPTION_TYPE.OPTIONAL_VALUE:
                if value is False:
                    continue
                options.append(spec.builder("" if value in (True, None) else value))
            else:
                options.append(spec.builder(value))
        return options

    def validate(self):
        """Assert that the given configuration is valid.

        Ensures the following statements are True:

            * The `node` section is a mapping
            * `executable`, if given, is a string
            * `options`, if given, is a mapping
            * Every option names a known anvil flag
            * Switches have a boolean or empty value
            * Valued options have a value of the expected type
        """
        self.assert_option(isinstance(self.dict, Mapping), "The 'node' setting must be a mapping!")
        if "executable" in self.dict:
            self.assert_option(
                isinstance(self.dict["executable"], str), 'Setting "executable" must be a string!'
            )
        self.assert_option(
            isinstance(self.raw_options, Mapping), 'Setting "options" must be a mapping!'
        )

        for name, value in self.raw_options.items():
            self.assert_option(
                name in OPTION_BUILDERS, UnknownOptionError(f"Unknown anvil option {name!r}!")
            )
            spec = OPTION_BUILDERS[name]
            if spec.kind is OPTION_TYPE.SWITCH:
                self.assert_option(
                    value is None or isinstance(value, bool),
                    f"Option {name!r} is a switch and does not take a value!",
                )
            elif spec.kind is OPTION_TYPE.OPTIONAL_VALUE:
                self.assert_option(
                    value is None or isinstance(value, (bool, spec.value_type)),
                    f"Option {name!r} takes an optional {spec.value_type.__name__} value!",
                )
            else:
                self.assert_option(
                    isinstance(value, spec.value_type) and not isinstance(value, bool),
                    f"Option {name!r} requires a {spec.value_type.__name__} value!",
                )
        log.debug("Validated node configuration", options=list(self.raw_options))
