"""Typed entities and the services that fetch them."""

from snyk_api.entities.container_image import ContainerImage, ContainerImagesService
from snyk_api.entities.group import Group, GroupsService
from snyk_api.entities.ignore import Ignore, IgnoredBy, IgnoreOptions, decode_ignored_issues
from snyk_api.entities.issue import Issue
from snyk_api.entities.issue_details import IssueDetails
from snyk_api.entities.issue_v2 import IssueV2
from snyk_api.entities.issues_service import OrgIssuesService, ProjectIssuesService
from snyk_api.entities.org import ImportTarget, Org, OrgSettings, OrgsService, is_uuid
from snyk_api.entities.project import Project, ProjectsService
from snyk_api.entities.target import Target, TargetsService
from snyk_api.entities.user import User, UsersService

__all__ = [
    "ContainerImage",
    "ContainerImagesService",
    "Group",
    "GroupsService",
    "Ignore",
    "IgnoredBy",
    "IgnoreOptions",
    "decode_ignored_issues",
    "Issue",
    "IssueDetails",
    "IssueV2",
    "OrgIssuesService",
    "ProjectIssuesService",
    "ImportTarget",
    "Org",
    "OrgSettings",
    "OrgsService",
    "is_uuid",
    "Project",
    "ProjectsService",
    "Target",
    "TargetsService",
    "User",
    "UsersService",
]
