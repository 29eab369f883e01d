"""Rendering of the category management page."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape

from . import state as page_state
from .state import PagePhase, PageState

TEMPLATES_DIR = Path(__file__).parent / "templates"

_environment = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)


@dataclass(frozen=True)
class CategoryRow:
    """One visible line of the two-level list."""

    id: str
    name: str
    slug: str
    is_main: bool
    subcategory_count: Optional[int] = None
    product_count: Optional[int] = None
    expanded: bool = False
    deleting: bool = False
    delete_prompt: str = ""


def build_rows(state: PageState) -> List[CategoryRow]:
    """Rows in display order: each main category, then its children if expanded."""
    rows: List[CategoryRow] = []
    for category in page_state.main_categories(state):
        expanded = category.id in state.expanded
        rows.append(
            CategoryRow(
                id=category.id,
                name=category.name,
                slug=category.slug,
                is_main=True,
                subcategory_count=len(category.children),
                expanded=expanded,
                deleting=category.id in state.deleting,
                delete_prompt=page_state.delete_prompt(category),
            )
        )
        if not expanded:
            continue
        for child in category.children:
            rows.append(
                CategoryRow(
                    id=child.id,
                    name=child.name,
                    slug=child.slug,
                    is_main=False,
                    product_count=child.product_count,
                    deleting=child.id in state.deleting,
                    delete_prompt=page_state.delete_prompt(child),
                )
            )
    return rows


def render_page(state: PageState) -> str:
    template = _environment.get_template("categories_page.html")
    if state.phase is PagePhase.LOADING:
        return template.render(loading=True)
    return template.render(
        loading=False,
        summary=page_state.summary(state),
        rows=build_rows(state),
        state=state,
        parent_options=page_state.parent_options(state),
        can_submit=page_state.can_submit(state),
        no_parent=page_state.NO_PARENT,
    )
