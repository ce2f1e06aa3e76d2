"""Org, group and member listings."""

from __future__ import annotations

import argparse

from snyk_api.commands.base import Command, register_command
from snyk_api.models import ListedEntity


@register_command("orgs")
class ListOrgsCommand(Command):
    """List organizations, or show one by ID or slug."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--org", default=None, help="Org ID or slug to show instead of listing all orgs")

    def run(self) -> None:
        orgs = [self._org()] if self.args.org else self.client.orgs.get_all()
        for org in orgs:
            self._record(ListedEntity(kind="org", id=org.id, name=org.name, detail=f"slug={org.slug}"))


@register_command("groups")
class ListGroupsCommand(Command):
    """List groups."""

    def run(self) -> None:
        for group in self.client.groups.get_all():
            self._record(ListedEntity(kind="group", id=group.id, name=group.name))


@register_command("members")
class ListMembersCommand(Command):
    """List the members of a group."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--group", required=True, help="Group ID")

    def run(self) -> None:
        for user in self.client.users.get_all(self.args.group):
            self._record(
                ListedEntity(
                    kind="user",
                    id=user.id,
                    name=user.username or user.name,
                    detail=f"email={user.email}, role={user.group_role}",
                )
            )
