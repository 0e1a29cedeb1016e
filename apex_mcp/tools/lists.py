"""
Description: X list management tools
Main features:
    - Create, read, update and delete lists
    - List membership and paginated listings
"""

from __future__ import annotations

from pydantic import Field

from apex_mcp.tools.base import CamelToolInput, ParamDisposition, ToolSpec
from apex_mcp.tools.registry import register_tool


# region Input models
class ListIdInput(CamelToolInput):
    list_id: str = Field(description="ID of the list")


class AddListMemberInput(CamelToolInput):
    list_id: str = Field(description="ID of the list")
    user_id: str = Field(description="ID of the user to add to the list")


class PageInput(CamelToolInput):
    cursor: str | None = Field(default=None, description="Pagination cursor from previous response")
    max_results: int | None = Field(
        default=None,
        ge=1,
        le=200,
        description="Maximum results per page (1-200, default: 100)",
    )


class ListMembersInput(PageInput):
    list_id: str = Field(description="ID of the list")


class CreateListInput(CamelToolInput):
    name: str = Field(min_length=1, max_length=25, description="Name of the list (1-25 characters)")
    description: str | None = Field(
        default=None,
        max_length=100,
        description="Description of the list (max 100 characters)",
    )
    is_private: bool | None = Field(
        default=None,
        alias="private",
        description="Whether the list is private (default: false)",
    )


class UpdateListInput(CamelToolInput):
    list_id: str = Field(description="ID of the list to update")
    name: str | None = Field(
        default=None,
        min_length=1,
        max_length=25,
        description="New name for the list (1-25 characters)",
    )
    description: str | None = Field(
        default=None,
        max_length=100,
        description="New description (max 100 characters)",
    )
    is_private: bool | None = Field(default=None, alias="private", description="Update privacy setting")
# endregion


# region Tool descriptors
ADD_LIST_MEMBER = register_tool(ToolSpec(
    name="add_list_member",
    description="Add a member to an X/Twitter list.",
    input_model=AddListMemberInput,
    method="POST",
    path="/apex/list/{listId}/member",
    disposition=ParamDisposition.BODY,
))

GET_LIST_MEMBERS = register_tool(ToolSpec(
    name="get_list_members",
    description="Get members of a list with pagination support. Returns user objects for each member.",
    input_model=ListMembersInput,
    method="GET",
    path="/apex/list/{listId}/member",
    disposition=ParamDisposition.QUERY,
))

CREATE_LIST = register_tool(ToolSpec(
    name="create_list",
    description="Create a new X/Twitter list. Returns the created list object with assigned ID.",
    input_model=CreateListInput,
    method="POST",
    path="/apex/list",
    disposition=ParamDisposition.BODY,
))

GET_USER_LISTS = register_tool(ToolSpec(
    name="get_user_lists",
    description="Get all lists owned by the authenticated user. Returns list objects with metadata.",
    input_model=PageInput,
    method="GET",
    path="/apex/list",
    disposition=ParamDisposition.QUERY,
))

DELETE_LIST = register_tool(ToolSpec(
    name="delete_list",
    description="Delete an X/Twitter list. This action cannot be undone.",
    input_model=ListIdInput,
    method="DELETE",
    path="/apex/list/{listId}",
))

GET_LIST = register_tool(ToolSpec(
    name="get_list",
    description="Get detailed information about a specific list including member/follower counts.",
    input_model=ListIdInput,
    method="GET",
    path="/apex/list/{listId}",
))

# Only supplied fields are sent; an empty update never reaches the API.
UPDATE_LIST = register_tool(ToolSpec(
    name="update_list",
    description="Update an existing list's properties. Only provided fields will be updated.",
    input_model=UpdateListInput,
    method="PUT",
    path="/apex/list/{listId}",
    disposition=ParamDisposition.BODY,
    skip_empty_body=True,
))
# endregion
