"""
Gate Bot — тексты сообщений и кнопок.
"""

# ═══════════ ПОЛЬЗОВАТЕЛЬ ═══════════
MENU_PROMPT = "Please choose one of the options below:"
SUBSCRIBE_PROMPT = "Please subscribe to the following channel(s):"
FILE_NOT_FOUND = "File not found!"
GENERIC_ERROR = "An error occurred. Please try again later."

# ═══════════ КНОПКИ ═══════════
BTN_CHANNEL = "Telegram Channel"
BTN_EXTERNAL_PROFILE = "Instagram"
BTN_GET_CODE = "Get Code"
BTN_SUBSCRIBE_CHANNEL = "Subscribe to {name}"
BTN_SUBSCRIBE_EXTERNAL = "Subscribe to Instagram"
BTN_CHECK_SUBSCRIPTION = "✅ Check Subscription"

# ═══════════ АДМИН: СОЗДАНИЕ ПОСТА ═══════════
AUTHORING_STARTED = "Send a video or photo to create a new post."
VIDEO_SAVED = "Video saved. Please send the text for the post."
PHOTO_SAVED = "Photo saved. Please send the text for the post."
TEXT_SAVED = "Text saved. Now send the file."
FILE_SAVED = "File saved. Send /sendpost to publish the post to the channel."

PUBLISH_MISSING = "Cannot send the post, missing: {fields}."
PUBLISH_SUCCESS = "Post successfully sent to the channel."
PUBLISH_ERROR = "Error occurred: {error}"

# Подпись поста в канале
POST_CAPTION = "{caption}\n\nPost ID: {post_id}"
