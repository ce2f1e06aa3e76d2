"""Base class and registry for CLI commands."""

from __future__ import annotations

import argparse
import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from snyk_api.models import ListedEntity

if TYPE_CHECKING:
    from snyk_api.client import Client
    from snyk_api.entities import Org

# ---------------------------------------------------------------------------
# Command Registry
# ---------------------------------------------------------------------------

_command_registry: dict[str, type[Command]] = {}


def register_command(name: str):
    """Decorator to register a command class under a CLI subcommand name."""

    def decorator(cls):
        _command_registry[name] = cls
        cls.command_name = name
        return cls

    return decorator


def get_command_registry() -> dict[str, type[Command]]:
    return _command_registry


# ---------------------------------------------------------------------------
# Command Base Class
# ---------------------------------------------------------------------------


class Command(ABC):
    """Base class for all listing commands."""

    command_name: str = ""

    def __init__(self, client: Client, args: argparse.Namespace):
        self.client = client
        self.args = args
        self.logger = logging.getLogger("snyk-api")
        self.results: list[ListedEntity] = []

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        """Add command-specific CLI arguments."""

    @abstractmethod
    def run(self) -> None:
        """Fetch the entities and record one row per entity."""
        ...

    def _org(self) -> Org:
        return self.client.orgs.get(self.args.org)

    def _record(self, entity: ListedEntity) -> ListedEntity:
        self.results.append(entity)
        record = self.logger.makeRecord("snyk-api", logging.INFO, "", 0, "", (), None)
        record.listed = entity
        self.logger.handle(record)
        return entity
