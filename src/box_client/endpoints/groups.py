"""
Groups and group membership endpoints.

Docs: https://developer.box.com/reference/resources/group/
"""

import logging
from typing import List, Optional, Tuple

import httpx

from box_types.base import EntityReference, PageQuery
from box_types.collaborations import CollaborationCollection
from box_types.groups import (
    Group,
    GroupCollection,
    GroupCreate,
    GroupListQuery,
    GroupUpdate,
    Membership,
    MembershipCollection,
    MembershipCreate,
    MembershipUpdate,
)

from box_client.base import BaseEndpointClient
from box_client.http import BoxHTTPClient

logger = logging.getLogger(__name__)

MEMBERSHIPS_PATH = "/group_memberships"


class GroupService(BaseEndpointClient):
    """
    Client for the /groups and /group_memberships endpoints.

    Single-resource calls return ``(response, value)``; errors are raised,
    never returned.
    """

    def __init__(self, http_client: BoxHTTPClient) -> None:
        super().__init__(http_client, base_path="/groups")

    # =========================================================================
    # Groups
    # =========================================================================

    def list_groups(
        self,
        filter: Optional[str] = None,
        *,
        limit: Optional[int] = None,
    ) -> List[Group]:
        """
        Fetch every group, following offsets until total_count is reached.

        Docs: https://developer.box.com/reference/get-groups/
        """
        groups: List[Group] = []
        offset = 0

        while True:
            query = self._build_model(GroupListQuery, filter=filter or None, offset=offset, limit=limit)
            response = self._send("GET", self.base_path, params=self._query_to_params(query))
            page = self._decode(response, GroupCollection)

            groups.extend(page.entries)
            offset += len(page.entries)

            if not page.entries or len(groups) >= page.total_count:
                break

        logger.debug(f"Fetched {len(groups)} groups")
        return groups

    def create_group(self, name: str) -> Tuple[httpx.Response, Group]:
        """
        Docs: https://developer.box.com/reference/post-groups/
        """
        self._require("name", name)
        payload = self._build_model(GroupCreate, name=name)
        response = self._send("POST", self.base_path, json_data=payload)
        return response, self._decode(response, Group)

    def update_group(self, group_id: str, name: str) -> Tuple[httpx.Response, Group]:
        """
        Rename a group.

        Docs: https://developer.box.com/reference/put-groups-id/
        """
        self._require("group_id", group_id)
        payload = self._build_model(GroupUpdate, name=name)
        response = self._send("PUT", self._build_path(group_id), json_data=payload)
        return response, self._decode(response, Group)

    def delete_group(self, group_id: str) -> Tuple[httpx.Response, bool]:
        """
        Delete a group. The flag is True only for 204 No Content.

        Docs: https://developer.box.com/reference/delete-groups-id/
        """
        self._require("group_id", group_id)
        response = self._send("DELETE", self._build_path(group_id))
        return response, response.status_code == httpx.codes.NO_CONTENT

    def group_collaborations(
        self,
        group_id: str,
        *,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Tuple[httpx.Response, CollaborationCollection]:
        """
        Docs: https://developer.box.com/reference/get-groups-id-collaborations/
        """
        self._require("group_id", group_id)
        params = self._query_to_params(self._build_model(PageQuery, offset=offset, limit=limit))
        response = self._send("GET", self._build_path(group_id, "collaborations"), params=params)
        return response, self._decode(response, CollaborationCollection)

    # =========================================================================
    # Memberships
    # =========================================================================

    def list_membership(
        self,
        group_id: str,
        *,
        offset: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> Tuple[httpx.Response, MembershipCollection]:
        """
        One page of a group's memberships. Callers page with offset/limit.

        Docs: https://developer.box.com/reference/get-groups-id-memberships/
        """
        self._require("group_id", group_id)
        params = self._query_to_params(self._build_model(PageQuery, offset=offset, limit=limit))
        response = self._send("GET", self._build_path(group_id, "memberships"), params=params)
        return response, self._decode(response, MembershipCollection)

    def get_membership(self, membership_id: str) -> Tuple[httpx.Response, Membership]:
        """
        Docs: https://developer.box.com/reference/get-group-memberships-id/
        """
        self._require("membership_id", membership_id)
        response = self._send("GET", f"{MEMBERSHIPS_PATH}/{membership_id}")
        return response, self._decode(response, Membership)

    def add_user_to_group(
        self,
        user_id: str,
        group_id: str,
        role: str = "",
    ) -> Tuple[httpx.Response, Membership]:
        """
        Docs: https://developer.box.com/reference/post-group-memberships/
        """
        self._require("user_id", user_id, message="must provide user ID")
        self._require("group_id", group_id, message="must provide group ID")

        payload = self._build_model(
            MembershipCreate,
            user=EntityReference(id=user_id),
            group=EntityReference(id=group_id),
            role=role,
        )
        response = self._send("POST", MEMBERSHIPS_PATH, json_data=payload)
        return response, self._decode(response, Membership)

    def update_membership(self, membership_id: str, role: str) -> Tuple[httpx.Response, Membership]:
        """
        Docs: https://developer.box.com/reference/put-group-memberships-id/
        """
        self._require("membership_id", membership_id)
        self._require("role", role)
        response = self._send(
            "PUT",
            f"{MEMBERSHIPS_PATH}/{membership_id}",
            json_data=self._build_model(MembershipUpdate, role=role),
        )
        return response, self._decode(response, Membership)

    def delete_membership(self, membership_id: str) -> httpx.Response:
        """
        Docs: https://developer.box.com/reference/delete-group-memberships-id/
        """
        self._require("membership_id", membership_id)
        return self._send("DELETE", f"{MEMBERSHIPS_PATH}/{membership_id}")
