"""Custom framework tags and the default grammar registering them."""

from miniweb.grammar import Grammar
from miniweb.tags.base import Tag
from miniweb.tags.csrf_token import CsrfTokenTag
from miniweb.tags.get import GetTag
from miniweb.tags.html import HtmlTag
from miniweb.tags.slot import SlotTag

DEFAULT_GRAMMAR = Grammar([CsrfTokenTag(), GetTag(), HtmlTag(), SlotTag()])

__all__ = [
    "DEFAULT_GRAMMAR",
    "CsrfTokenTag",
    "GetTag",
    "HtmlTag",
    "SlotTag",
    "Tag",
]
