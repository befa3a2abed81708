# Copyright 2026 TIER IV, inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Configuration management for the JSON source validator."""

import logging
import os
from dataclasses import dataclass

from .parsing.json_parser import ParseOptions
from .utils.logging_utils import PACKAGE_LOGGER_NAME, configure_split_stream_logging

ENV_PREFIX = "JSON_SOURCE_VALIDATOR_"


def _env_flag(name: str, default: bool) -> bool:
    return os.getenv(ENV_PREFIX + name, "true" if default else "false").lower() in ("1", "true", "yes")


@dataclass
class ValidatorConfig:
    """Configuration class for validation runs."""
    log_level: str = "WARNING"
    print_level: str = "ERROR"
    allow_trailing_comma: bool = False
    disallow_comments: bool = False
    encoding: str = "utf-8"

    @classmethod
    def from_env(cls) -> 'ValidatorConfig':
        """Create configuration from environment variables."""
        return cls(
            log_level=os.getenv(ENV_PREFIX + 'LOG_LEVEL', 'WARNING'),
            print_level=os.getenv(ENV_PREFIX + 'PRINT_LEVEL', 'ERROR'),
            allow_trailing_comma=_env_flag('ALLOW_TRAILING_COMMA', False),
            disallow_comments=_env_flag('DISALLOW_COMMENTS', False),
            encoding=os.getenv(ENV_PREFIX + 'ENCODING', 'utf-8'),
        )

    def parse_options(self) -> ParseOptions:
        """Parser relaxations used when a caller does not pass its own."""
        return ParseOptions(
            disallow_comments=self.disallow_comments,
            allow_trailing_comma=self.allow_trailing_comma,
        )

    def set_logging(self) -> logging.Logger:
        """Setup logging based on configuration."""
        level = getattr(logging, self.log_level.upper(), logging.WARNING)
        stderr_level = getattr(logging, self.print_level.upper(), logging.ERROR)

        formatter = logging.Formatter('%(name)s - %(levelname)s - %(message)s')
        return configure_split_stream_logging(
            level=level,
            stderr_level=stderr_level,
            formatter=formatter,
            logger_name=PACKAGE_LOGGER_NAME,
        )


# Global configuration instance
validator_config = ValidatorConfig.from_env()
