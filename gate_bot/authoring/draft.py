"""
Черновик поста админа и переходы состояний.

Черновик собирается по шагам: медиа (видео или фото) → текст → файл,
затем /sendpost публикует его. Состояние хранится в FSM aiogram
(PostAuthoring.collecting), поля черновика — в данных FSM.
apply_event и missing_fields работают только со снимком данных и не делают I/O.
"""
import enum
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from aiogram.fsm.state import State, StatesGroup

from gate_bot import texts


class PostAuthoring(StatesGroup):
    """Админ присылает медиа/текст/файл для нового поста"""
    collecting = State()


class MediaKind(enum.Enum):
    VIDEO = "video"
    PHOTO = "photo"


# Ключи в данных FSM
KEY_MEDIA_KIND = "media_kind"
KEY_MEDIA_FILE_ID = "media_file_id"
KEY_CAPTION = "caption"
KEY_FILE = "attached_file"
KEY_LAST_POST_ID = "last_post_id"  # Остаётся после публикации

# Порядок важен: так поля перечисляются в сообщении об ошибке
FIELD_MEDIA = "media"
FIELD_CAPTION = "caption"
FIELD_FILE = "file"


@dataclass(frozen=True)
class DraftMedia:
    kind: MediaKind
    file_id: str


@dataclass(frozen=True)
class Draft:
    """Снимок черновика из данных FSM"""
    media: Optional[DraftMedia] = None
    caption: Optional[str] = None
    attached_file: Optional[str] = None

    @classmethod
    def from_data(cls, data: Dict[str, Any]) -> "Draft":
        media = None
        if data.get(KEY_MEDIA_FILE_ID):
            media = DraftMedia(
                kind=MediaKind(data.get(KEY_MEDIA_KIND, MediaKind.PHOTO.value)),
                file_id=data[KEY_MEDIA_FILE_ID],
            )
        return cls(
            media=media,
            caption=data.get(KEY_CAPTION),
            attached_file=data.get(KEY_FILE),
        )


# === События от админа ===

@dataclass(frozen=True)
class MediaReceived:
    kind: MediaKind
    file_id: str
    caption: Optional[str] = None


@dataclass(frozen=True)
class TextReceived:
    text: str


@dataclass(frozen=True)
class FileReceived:
    file_id: str


DraftEvent = Union[MediaReceived, TextReceived, FileReceived]


def missing_fields(data: Dict[str, Any]) -> List[str]:
    """Каких полей не хватает для публикации (пустой текст = нет текста)"""
    draft = Draft.from_data(data)
    missing = []
    if draft.media is None:
        missing.append(FIELD_MEDIA)
    if not draft.caption:
        missing.append(FIELD_CAPTION)
    if draft.attached_file is None:
        missing.append(FIELD_FILE)
    return missing


def apply_event(event: DraftEvent) -> Tuple[Dict[str, Any], Optional[str]]:
    """
    Переход черновика по событию.

    Args:
        event: Что прислал админ

    Returns:
        (изменения для данных FSM, текст ответа админу)
    """
    if isinstance(event, MediaReceived):
        updates = {KEY_MEDIA_KIND: event.kind.value, KEY_MEDIA_FILE_ID: event.file_id}
        # Подпись медиа перезаписывает текст, только если она есть
        if event.caption:
            updates[KEY_CAPTION] = event.caption
        reply = texts.VIDEO_SAVED if event.kind == MediaKind.VIDEO else texts.PHOTO_SAVED
        return updates, reply

    if isinstance(event, TextReceived):
        return {KEY_CAPTION: event.text}, texts.TEXT_SAVED

    if isinstance(event, FileReceived):
        return {KEY_FILE: event.file_id}, texts.FILE_SAVED

    return {}, None
