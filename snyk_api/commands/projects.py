"""Project, target and container image listings for an org."""

from __future__ import annotations

import argparse

from snyk_api.commands.base import Command, register_command
from snyk_api.models import ListedEntity


def add_org_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--org", required=True, help="Org ID or slug")


@register_command("projects")
class ListProjectsCommand(Command):
    """List the projects of an org."""

    add_arguments = staticmethod(add_org_argument)

    def run(self) -> None:
        for project in self._org().projects.get_all():
            counts = project.meta.latest_issue_counts
            self._record(
                ListedEntity(
                    kind="project",
                    id=project.id,
                    name=project.name,
                    detail=(
                        f"scan={project.scan_type}, "
                        f"critical={counts.critical} high={counts.high} medium={counts.medium} low={counts.low}"
                    ),
                )
            )


@register_command("targets")
class ListTargetsCommand(Command):
    """List the targets of an org."""

    @staticmethod
    def add_arguments(parser: argparse.ArgumentParser) -> None:
        add_org_argument(parser)
        parser.add_argument("--remote-url", default=None, help="Only targets with this remote URL")

    def run(self) -> None:
        org = self._org()
        targets = org.targets.get_by_remote_url(self.args.remote_url) if self.args.remote_url else org.targets.get_all()
        for target in targets:
            self._record(
                ListedEntity(kind="target", id=target.id, name=target.display_name, detail=f"origin={target.origin}")
            )


@register_command("container-images")
class ListContainerImagesCommand(Command):
    """List the container images of an org."""

    add_arguments = staticmethod(add_org_argument)

    def run(self) -> None:
        for image in self._org().container_images.get_all():
            self._record(
                ListedEntity(
                    kind="container_image",
                    id=image.id,
                    name=", ".join(image.names),
                    detail=f"platform={image.platform}",
                )
            )
