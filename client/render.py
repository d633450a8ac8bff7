"""
Rendering adapter: turns API records and view-model state into HTML strings.

Everything here is a pure function so it can be tested without a browser.
"""

import html
import re
from datetime import datetime, timezone
from typing import Optional

DEFAULT_AVATAR = "assets/icons/default-profile.png"
POST_MAX_LENGTH = 280
BIO_MAX_LENGTH = 160

_CONTENT_TOKEN = re.compile(r'(https?://[^\s]+)|#(\w+)|@(\w+)')


def escape_html(unsafe) -> str:
    return html.escape("" if unsafe is None else str(unsafe), quote=True)


def format_post_content(content: Optional[str]) -> str:
    """Escape post text and turn links, hashtags and mentions into markup."""
    if not content:
        return ""
    parts = []
    position = 0
    for match in _CONTENT_TOKEN.finditer(content):
        parts.append(escape_html(content[position:match.start()]))
        url, hashtag, mention = match.groups()
        if url:
            url = escape_html(url)
            parts.append(f'<a href="{url}" target="_blank" rel="noopener">{url}</a>')
        elif hashtag:
            parts.append(f'<span class="hashtag">#{hashtag}</span>')
        else:
            parts.append(f'<span class="mention">@{mention}</span>')
        position = match.end()
    parts.append(escape_html(content[position:]))
    return "".join(parts)


def parse_timestamp(timestamp: str) -> Optional[datetime]:
    """Parse ISO or sqlite style timestamps; naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(timestamp: Optional[str], now: Optional[datetime] = None) -> str:
    if not timestamp:
        return "just now"
    posted = parse_timestamp(timestamp)
    if posted is None:
        return escape_html(timestamp)
    now = now or datetime.now(timezone.utc)
    diff_seconds = (now - posted).total_seconds()
    minutes = int(diff_seconds // 60)
    hours = int(diff_seconds // 3600)
    days = int(diff_seconds // 86400)

    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes}m"
    if hours < 24:
        return f"{hours}h"
    if days < 7:
        return f"{days}d"
    return f"{posted.month}/{posted.day}/{posted.year}"


def format_join_date(timestamp: Optional[str]) -> str:
    joined = parse_timestamp(timestamp) if timestamp else None
    if joined is None:
        return "Joined recently"
    return f"Joined {joined.strftime('%B %Y')}"


def char_counter(text: str, limit: int = POST_MAX_LENGTH, warn_at: int = 250) -> dict:
    """Counter label plus a level: 'ok', 'warning' past ``warn_at``, 'error' past ``limit``."""
    length = len(text or "")
    if length > limit:
        level = "error"
    elif length > warn_at:
        level = "warning"
    else:
        level = "ok"
    return {"text": f"{length}/{limit}", "level": level}


def render_post(post: dict, now: Optional[datetime] = None) -> str:
    user = post.get("user") or {}
    display_name = escape_html(user.get("display_name") or "Unknown User")
    username = escape_html(user.get("username") or "unknown")
    avatar = escape_html(user.get("avatar_url") or DEFAULT_AVATAR)
    liked = post.get("liked_by_me", False)
    like_class = "post-action like-btn liked" if liked else "post-action like-btn"
    return (
        f'<div class="post" data-post-id="{escape_html(post.get("id"))}">'
        f'<div class="post-header">'
        f'<img src="{avatar}" alt="{display_name}" class="post-user-avatar">'
        f'<div class="post-user-info">'
        f'<div class="post-display-name">{display_name}</div>'
        f'<div class="post-username">@{username}</div>'
        f'</div>'
        f'<div class="post-time">{format_timestamp(post.get("created_at"), now)}</div>'
        f'</div>'
        f'<div class="post-content"><p>{format_post_content(post.get("content"))}</p></div>'
        f'<div class="post-actions">'
        f'<button class="{like_class}">❤️ <span class="like-count">{int(post.get("likes_count") or 0)}</span></button>'
        f'</div>'
        f'</div>'
    )


def render_feed(posts, now: Optional[datetime] = None) -> str:
    if not posts:
        return (
            '<div class="empty-state"><h3>No posts yet</h3>'
            '<p>Be the first to share something!</p></div>'
        )
    return "".join(render_post(post, now) for post in posts)


def render_badges(is_verified: bool, is_premium: bool) -> str:
    badges = []
    if is_verified:
        badges.append('<span class="badge verified" title="Verified">✓</span>')
    if is_premium:
        badges.append('<span class="badge premium" title="Premium">★</span>')
    return "".join(badges)


def render_profile_header(profile: dict, action_label: str) -> str:
    display_name = escape_html(profile.get("display_name"))
    username = escape_html(profile.get("username"))
    bio = escape_html(profile.get("bio")) or "No bio yet."
    banner = profile.get("banner_url")
    banner_html = f'<img class="profile-banner" src="{escape_html(banner)}">' if banner else ""
    return (
        f'<div class="profile-header">{banner_html}'
        f'<img class="profile-avatar" src="{escape_html(profile.get("avatar_url") or DEFAULT_AVATAR)}">'
        f'<h2 class="profile-display-name">{display_name}'
        f'{render_badges(profile.get("is_verified"), profile.get("is_premium"))}</h2>'
        f'<div class="profile-username">@{username}</div>'
        f'<p class="profile-bio">{bio}</p>'
        f'<div class="profile-joined">{format_join_date(profile.get("created_at"))}</div>'
        f'<div class="profile-stats">'
        f'<span class="posts-count">{profile.get("posts_count", 0)} posts</span>'
        f'<span class="following-count">{profile.get("following_count", 0)} following</span>'
        f'<span class="followers-count">{profile.get("followers_count", 0)} followers</span>'
        f'</div>'
        f'<button class="profile-action">{escape_html(action_label)}</button>'
        f'</div>'
    )


def render_banner(banner) -> str:
    return f'<div class="message message-{escape_html(banner.kind)}">{escape_html(banner.message)}</div>'


def page_title(profile: dict) -> str:
    return f"{profile.get('display_name')} (@{profile.get('username')}) - Social Platform"
