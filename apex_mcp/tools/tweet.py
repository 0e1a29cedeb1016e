"""
Description: Tweet tools
Main features:
    - Tweet lookup and reply suggestions
    - Posting tweets and replies
    - Advanced tweet search
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import Field

from apex_mcp.tools.base import CamelToolInput, ParamDisposition, ToolInput, ToolSpec
from apex_mcp.tools.registry import register_tool


# region Input models
class TweetIdInput(ToolInput):
    id: str = Field(description="Id of the tweet.")


class GenerateReplyInput(ToolInput):
    text: str = Field(description="Text to be replied to.")
    image_urls: list[str] | None = Field(
        default=None,
        description=(
            "Array of image URLs used as context for the reply. "
            "If not provided, the reply will be to only text."
        ),
    )


class PostTweetInput(ToolInput):
    username: str = Field(description="Username of the user posting the tweet.")
    text: str = Field(description="Text of the tweet to be posted.")
    image_urls: list[str] | None = Field(
        default=None,
        description="Optional image URLs to include with the tweet.",
    )


class PostReplyInput(ToolInput):
    tweet_id: str = Field(description="Id of the tweet to reply to.")
    text: str = Field(description="Text of the reply to be posted.")


class SearchTweetsInput(CamelToolInput):
    count: float | None = Field(
        default=None,
        description="Number of tweets to return. Recommended: 50 for comprehensive results, 20 for quick scans.",
    )
    cursor: str | None = Field(
        default=None,
        description="Pagination cursor for next batch of results, taken from the previous response.",
    )
    end_date: date | str | None = Field(
        default=None,
        description="End date for search range. Format: YYYY-MM-DD (e.g., '2025-07-30')",
    )
    exclude_words: list[str] | None = Field(
        default=None,
        description="Words to exclude from results, e.g. ['crypto', 'spam'].",
    )
    from_users: list[str] | None = Field(
        default=None,
        description="Search tweets FROM these users. Usernames WITHOUT @, e.g. ['elonmusk', 'OpenAI'].",
    )
    hashtags: list[str] | None = Field(
        default=None,
        description="Hashtags to search for WITHOUT #, e.g. ['AI', 'web3'].",
    )
    include_phrase: str | None = Field(
        default=None,
        description="Exact phrase to search for.",
    )
    include_words: list[str] | None = Field(
        default=None,
        description="Words that must appear in results, e.g. ['AI', 'machine learning'].",
    )
    language: str | None = Field(
        default=None,
        description="Language filter using ISO codes, e.g. 'en', 'es', 'ja'.",
    )
    list_id: str | None = Field(
        default=None,
        alias="list",
        description="X list ID to search within. Limits results to tweets from members of this list.",
    )
    max_id: str | None = Field(
        default=None,
        description="Only return tweets with IDs less than this.",
    )
    mentions: list[str] | None = Field(
        default=None,
        description="Find tweets mentioning these users. Usernames WITHOUT @.",
    )
    min_likes: float | None = Field(
        default=None,
        description="Minimum likes threshold. 50+ for social proof, 1000+ for viral tweets.",
    )
    min_replies: float | None = Field(
        default=None,
        description="Minimum replies threshold. Try 10+ for engaged conversations.",
    )
    min_retweets: float | None = Field(
        default=None,
        description="Minimum retweets threshold. 50+ for viral reach.",
    )
    only_links: bool | None = Field(
        default=None,
        description="Only tweets containing URLs.",
    )
    only_original: bool | None = Field(
        default=None,
        description="Exclude retweets and quote tweets.",
    )
    only_replies: bool | None = Field(
        default=None,
        description="Only reply tweets.",
    )
    only_text: bool | None = Field(
        default=None,
        description="Exclude tweets with media (photos/videos).",
    )
    optional_words: list[str] | None = Field(
        default=None,
        description="Words that may appear. Tweets may contain any of these words.",
    )
    quoted: str | None = Field(
        default=None,
        description="Tweet ID to find quote tweets of.",
    )
    since_id: str | None = Field(
        default=None,
        description="Only return tweets with IDs greater than this.",
    )
    start_date: date | str | None = Field(
        default=None,
        description="Start date for search range. Format: YYYY-MM-DD (e.g., '2025-07-25')",
    )
    top: bool | None = Field(
        default=None,
        description="Trending/popular tweets instead of recent ones.",
    )
    to_users: list[str] | None = Field(
        default=None,
        description="Find tweets TO/replying to these users. Usernames WITHOUT @.",
    )
# endregion


def _reply_query(args: dict[str, Any]) -> dict[str, Any]:
    # the API expects one image_url entry per image
    return {"text": args["text"], "image_url": args.get("image_urls")}


SEARCH_DESCRIPTION = """Advanced Twitter/X search tool for finding tweets with powerful filtering capabilities.

Returns tweets matching your criteria, sorted by relevance or time. Expect 2-5 second response times.
Note: API may return duplicate entries - this is normal behavior.

Common patterns:
- High-quality content: Set minLikes to 100+ and use includeWords for topics
- Viral analysis: Use minRetweets 50+ with hashtags and top=true
- User analysis: Combine fromUsers with date ranges and engagement filters
- Content exclusion: Use excludeWords to filter out unwanted topics"""


# region Tool descriptors
GET_TWEET = register_tool(ToolSpec(
    name="get_tweet",
    description="A tool to get a tweet by its id.",
    input_model=TweetIdInput,
    method="GET",
    path="/apex/tweet/{id}/details",
))

# Reply generation is a GET with query params on the Apex API.
GENERATE_REPLY = register_tool(ToolSpec(
    name="generate_reply",
    description="Tool that generates a reply to a message.",
    input_model=GenerateReplyInput,
    method="GET",
    path="/apex/reply",
    disposition=ParamDisposition.QUERY,
    shape=_reply_query,
    headers={"accept": "application/json"},
))

GENERATE_REPLY_TO_TWEET = register_tool(ToolSpec(
    name="generate_reply_to_tweet",
    description=(
        "A tool to generate a reply suggestion to a tweet. "
        "Use if you don't have any context to generate a reply yet."
    ),
    input_model=TweetIdInput,
    method="GET",
    path="/apex/tweet/{id}/reply",
))

POST_TWEET = register_tool(ToolSpec(
    name="post_tweet",
    description="Tool that posts a tweet.",
    input_model=PostTweetInput,
    method="POST",
    path="/apex/tweet",
    disposition=ParamDisposition.BODY,
))

POST_REPLY_TO_TWEET = register_tool(ToolSpec(
    name="post_reply_to_tweet",
    description="Tool that posts a reply to a tweet with input text.",
    input_model=PostReplyInput,
    method="POST",
    path="/apex/tweet/{tweet_id}/reply",
    disposition=ParamDisposition.BODY,
))

SEARCH_TWEETS = register_tool(ToolSpec(
    name="search_tweets",
    description=SEARCH_DESCRIPTION,
    input_model=SearchTweetsInput,
    method="GET",
    path="/apex/tweet/search",
    disposition=ParamDisposition.QUERY,
))
# endregion
