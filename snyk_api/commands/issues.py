"""Issue and ignore listings."""

from __future__ import annotations

import argparse

from snyk_api.commands.base import Command, register_command
from snyk_api.models import ListedEntity


@register_command("issues")
class ListIssuesCommand(Command):
    """List the issues of an org or of one of its projects."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--org", required=True, help="Org ID or slug")
        parser.add_argument("--project", default=None, help="Project ID")

    def run(self) -> None:
        org = self._org()
        if self.args.project:
            issues = org.projects.get(self.args.project).issues.get_all_v2()
        else:
            issues = org.issues.get_all_v2()

        for issue in issues:
            self._record(
                ListedEntity(
                    kind="issue",
                    id=issue.key or issue.id,
                    name=issue.title,
                    detail=f"severity={issue.effective_severity_level}, status={issue.status}, ignored={issue.ignored}",
                )
            )


@register_command("ignores")
class ListIgnoresCommand(Command):
    """List the ignored issues of a project."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--org", required=True, help="Org ID or slug")
        parser.add_argument("--project", required=True, help="Project ID")

    def run(self) -> None:
        project = self._org().projects.get(self.args.project)
        for issue_id, ignores in sorted(project.issues.get_ignored().items()):
            for ignore in ignores:
                self._record(
                    ListedEntity(
                        kind="ignore",
                        id=issue_id,
                        name=ignore.reason_type,
                        detail=f"path={','.join(ignore.path)}, reason={ignore.reason}",
                    )
                )
