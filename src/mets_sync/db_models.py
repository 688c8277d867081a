# --- MongoDB Document Shapes ---
# Every document is upserted with $set and keyed on _id by the upstream identifier,
# so re-running a sync updates the same document instead of adding another.

# 1. mets_schedule_<season> Collection (one document per game)
# Populated by schedule_sync.py from the MLB Stats API schedule endpoint.
SCHEDULE_SCHEMA = {
    "_id": "MLB gamePk as a string (e.g., 778899)",
    "date": "YYYY-MM-DD",
    "opponent": "Team Name (e.g., Atlanta Braves)",
    "location": "Home | Away",
    "time": "Local start time, e.g. 07:10 PM (America/New_York)",
    "gameType": "Spring | Regular",
    "result": "Pending | W | L",
    "scoreUs": 0,
    "scoreThem": 0,
    "season": "2026",
}

# 2. mets_squad Collection (one document per player on the active roster)
# Players who leave the roster are not removed.
ROSTER_SCHEMA = {
    "_id": "MLB person id as a string (e.g., 624413)",
    "name": "Pete Alonso",
    "number": "20",
    "position": "First Base",
    "mlbId": 624413,
    "status": "Active (30-Man)",
}

# 3. mets_social Collection (latest hashtag posts from Bluesky)
SOCIAL_SCHEMA = {
    "_id": "Record key, the last segment of the at:// post URI",
    "authorName": "Display name (falls back to the handle)",
    "handle": "someone.bsky.social",
    "avatar": "Avatar URL or None",
    "text": "Post body",
    "timestamp": "Original createdAt, ISO 8601",
    "image": "First embedded image URL or None",
    "link": "https://bsky.app/profile/<handle>/post/<key>",
    "type": "bluesky",
}
