"""Identity gate binding: turns an authenticated Django user into a Principal.

Roles come from membership in the auth group named after the role.
"""

from rest_framework.request import Request

from campus_events.domain import Principal, Role
from campus_events.domain.errors import ForbiddenError


def principal_from_request(request: Request) -> Principal:
    """Return the caller's principal.

    Raises:
        ForbiddenError: If the user belongs to no role group, or to both.
    """
    user = request.user
    groups = set(user.groups.values_list("name", flat=True))
    roles = [role for role in Role if role.value in groups]
    if len(roles) != 1:
        raise ForbiddenError("Account has no single campus role")
    return Principal(id=str(user.pk), role=roles[0])
