"""
Form submissions
Validation and Discord embed building for the demo and contact forms
"""

from dataclasses import dataclass, fields
from datetime import datetime, timezone
from typing import Optional

from errors import ValidationError
from utils.helpers import safe_strip, truncate

# Discord rejects field values longer than EMBED_FIELD_LIMIT and embeds whose
# combined title, field names and values exceed EMBED_TOTAL_LIMIT
EMBED_FIELD_LIMIT = 1024
EMBED_TOTAL_LIMIT = 6000
EMPTY_FIELD_VALUE = 'n/a'

SUBMISSION_COLOR = 0x7C3AED
CONTACT_COLOR = 0x0EA5E9


def _require_object(data) -> dict:
    if not data or not isinstance(data, dict):
        raise ValidationError('No data provided')
    return data


def _check_required(data: dict, required: tuple):
    """Raise for the first required field whose submitted value is falsy"""
    for name in required:
        if not data.get(name):
            raise ValidationError(f'{name} is required', field=name)


def _embed_field(name: str, value, inline: bool = False) -> dict:
    if isinstance(value, bool):
        text = 'Yes' if value else 'No'
    elif value is None:
        text = ''
    else:
        text = truncate(str(value), EMBED_FIELD_LIMIT)
    # Discord rejects blank field values
    if not text.strip():
        text = EMPTY_FIELD_VALUE
    return {'name': name, 'value': text, 'inline': inline}


def _embed_length(embed: dict) -> int:
    return len(embed.get('title', '')) + sum(
        len(f['name']) + len(f['value']) for f in embed['fields']
    )


def _fit_embed(embed: dict) -> dict:
    """Shorten the longest field values until the embed fits EMBED_TOTAL_LIMIT"""
    excess = _embed_length(embed) - EMBED_TOTAL_LIMIT
    while excess > 0:
        longest = max(embed['fields'], key=lambda f: len(f['value']))
        if len(longest['value']) <= len(EMPTY_FIELD_VALUE):
            break
        new_length = max(len(longest['value']) - excess, len(EMPTY_FIELD_VALUE))
        longest['value'] = truncate(longest['value'], new_length)
        excess = _embed_length(embed) - EMBED_TOTAL_LIMIT
    return embed


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class DemoSubmission:
    """A demo sent through the Submit Music form"""
    name: str
    email: str
    artist_name: str
    links: str
    confirm_rights: bool
    project_title: Optional[str] = None
    message: Optional[str] = None

    REQUIRED = ('name', 'email', 'artistName', 'links', 'confirmRights')

    @classmethod
    def from_json(cls, data) -> 'DemoSubmission':
        """
        Validate a request body and build the submission

        Raises:
            ValidationError: body missing, or a required field is falsy
        """
        data = _require_object(data)
        _check_required(data, cls.REQUIRED)

        return cls(
            name=safe_strip(data.get('name')),
            email=safe_strip(data.get('email')),
            artist_name=safe_strip(data.get('artistName')),
            links=safe_strip(data.get('links')),
            confirm_rights=bool(data.get('confirmRights')),
            project_title=safe_strip(data.get('projectTitle')),
            message=safe_strip(data.get('message')),
        )

    def to_embed(self) -> dict:
        return _fit_embed({
            'title': 'New demo submission',
            'color': SUBMISSION_COLOR,
            'fields': [
                _embed_field('Name', self.name, inline=True),
                _embed_field('Email', self.email, inline=True),
                _embed_field('Artist Name', self.artist_name, inline=True),
                _embed_field('Project Title', self.project_title, inline=True),
                _embed_field('Links', self.links),
                _embed_field('Message', self.message),
                _embed_field('Rights Confirmed', self.confirm_rights, inline=True),
            ],
            'timestamp': _timestamp(),
        })


@dataclass(frozen=True)
class ContactMessage:
    """A message sent through the Contact form"""
    name: str
    email: str
    message: str
    topic: Optional[str] = None

    REQUIRED = ('name', 'email', 'message')

    @classmethod
    def from_json(cls, data) -> 'ContactMessage':
        data = _require_object(data)
        _check_required(data, cls.REQUIRED)
        return cls(**{f.name: safe_strip(data.get(f.name)) for f in fields(cls)})

    def to_embed(self) -> dict:
        return _fit_embed({
            'title': 'New contact message',
            'color': CONTACT_COLOR,
            'fields': [
                _embed_field('Name', self.name, inline=True),
                _embed_field('Email', self.email, inline=True),
                _embed_field('Topic', self.topic, inline=True),
                _embed_field('Message', self.message),
            ],
            'timestamp': _timestamp(),
        })
