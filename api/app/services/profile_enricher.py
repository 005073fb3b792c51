from __future__ import annotations

import logging

from app.models.contributor import Contributor
from app.services.github_client import ForgeError, GitHubClient

log = logging.getLogger(__name__)


def enrich_contributor(client: GitHubClient, contributor: Contributor) -> Contributor:
    """Merge public-profile fields onto a contributor. Failures return the record unchanged."""
    try:
        profile = client.get_user(contributor.login)
    except ForgeError as e:
        log.warning("Could not fetch data for %s: %s", contributor.login, e)
        return contributor
    if not isinstance(profile, dict):
        log.warning("Could not fetch data for %s: unexpected profile payload", contributor.login)
        return contributor
    return contributor.with_profile(profile)
