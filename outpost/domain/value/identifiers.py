"""Strongly typed identifiers for Outpost domain entities.

Using NewType keeps identity and server IDs from being mixed up.
"""

from typing import NewType
from uuid import UUID

IdentityId = NewType("IdentityId", UUID)
ServerStatusId = NewType("ServerStatusId", UUID)
