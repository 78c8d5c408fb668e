"""
Rendering adapters for intervention surfaces.

The presenter and scheduler produce view models; a renderer turns them
into whatever the client displays. CollectingRenderer hands them back to
the HTTP layer as JSON, HtmlRenderer produces markup for server-rendered
pages.
"""

import html
import logging
from abc import ABC, abstractmethod

from app.safety.models import FollowUpBanner, InterventionView, ResourceView

logger = logging.getLogger(__name__)


class InterventionRenderer(ABC):
    """Outbound rendering port."""

    @abstractmethod
    def render_intervention(self, view: InterventionView) -> None:
        """Display the intervention surface."""
        pass

    @abstractmethod
    def render_banner(self, banner: FollowUpBanner) -> None:
        """Display the follow-up banner."""
        pass


class CollectingRenderer(InterventionRenderer):
    """Keeps rendered payloads so the caller can return them."""

    def __init__(self):
        self.interventions: list[InterventionView] = []
        self.banners: list[FollowUpBanner] = []

    def render_intervention(self, view: InterventionView) -> None:
        self.interventions.append(view)

    def render_banner(self, banner: FollowUpBanner) -> None:
        self.banners.append(banner)


class HtmlRenderer(InterventionRenderer):
    """
    Renders view models to escaped HTML fragments.

    Usage:
        renderer = HtmlRenderer()
        renderer.render_intervention(view)
        renderer.fragments[-1]  # '<div class="intervention-modal">...'
    """

    def __init__(self):
        self.fragments: list[str] = []

    def render_intervention(self, view: InterventionView) -> None:
        item_class = "crisis-resource" if view.variant == "crisis" else "support-resource"
        resources = "".join(self._resource(item, item_class) for item in view.resources)
        buttons = "".join(
            f'<button class="btn {"btn-primary" if action.id == "seek_help" else "btn-secondary"}" '
            f'data-action="{action.id}" data-dismiss="true">{html.escape(action.label)}</button>'
            for action in view.actions
        )
        self.fragments.append(
            '<div class="intervention-modal" role="dialog">'
            '<div class="intervention-content">'
            f"<h3>{html.escape(view.title)}</h3>"
            f"<p>{html.escape(view.message)}</p>"
            f'<div class="resource-list">{resources}</div>'
            f'<div class="intervention-actions">{buttons}</div>'
            "</div></div>"
        )

    def render_banner(self, banner: FollowUpBanner) -> None:
        self.fragments.append(
            f'<div class="follow-up-banner" data-placement="{banner.placement}">'
            f"<p>{html.escape(banner.message)}</p>"
            f'<button data-dismiss="true">{html.escape(banner.dismiss_label)}</button>'
            "</div>"
        )

    def _resource(self, item: ResourceView, css_class: str) -> str:
        parts = [f"<strong>{html.escape(item.name)}</strong>"]
        if item.description:
            parts.append(f"<p>{html.escape(item.description)}</p>")
        for affordance in item.affordances:
            label = html.escape(affordance.label)
            if affordance.href is None:
                parts.append(f"<p>{label}</p>")
                continue
            href = html.escape(affordance.href, quote=True)
            if affordance.kind == "phone":
                parts.append(f'<a href="{href}" class="crisis-phone">{label}</a>')
            elif affordance.kind == "web":
                parts.append(f'<a href="{href}" target="_blank" rel="noopener">{label}</a>')
            else:
                parts.append(f'<a href="{href}">{label}</a>')
        if item.items:
            listed = "".join(f"<li>{html.escape(entry)}</li>" for entry in item.items)
            parts.append(f"<ul>{listed}</ul>")
        return f'<div class="{css_class}">{"".join(parts)}</div>'
