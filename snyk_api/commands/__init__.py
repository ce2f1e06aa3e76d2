"""CLI commands for snyk-api."""

from snyk_api.commands.base import Command, get_command_registry, register_command

# Import all commands to register them
from snyk_api.commands.issues import ListIgnoresCommand, ListIssuesCommand
from snyk_api.commands.orgs import ListGroupsCommand, ListMembersCommand, ListOrgsCommand
from snyk_api.commands.projects import ListContainerImagesCommand, ListProjectsCommand, ListTargetsCommand

__all__ = [
    "Command",
    "register_command",
    "get_command_registry",
    "ListOrgsCommand",
    "ListGroupsCommand",
    "ListMembersCommand",
    "ListProjectsCommand",
    "ListTargetsCommand",
    "ListContainerImagesCommand",
    "ListIssuesCommand",
    "ListIgnoresCommand",
]
