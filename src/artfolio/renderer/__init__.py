"""Client renderer - templates, data binding and the editing session."""

from artfolio.renderer.client import ContentStateClient
from artfolio.renderer.pages import PageState, render_page
from artfolio.renderer.session import Renderer, SaveOutcome
from artfolio.renderer.templates import TemplateStore, render_template

__all__ = [
    "ContentStateClient",
    "PageState",
    "Renderer",
    "SaveOutcome",
    "TemplateStore",
    "render_page",
    "render_template",
]
