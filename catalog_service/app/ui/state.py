"""
Category management page state.

The page owns a single immutable ``PageState``. Every user event or network
completion is a pure function ``(state, ...) -> state``; the controller in
``page.py`` is the only place that swaps the current state.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Optional, Sequence, Tuple

from ..schemas.category import CategoryResponse, CategoryTreeNode
from ..utils.slug import generate_slug

NO_PARENT = "none"


class PagePhase(str, Enum):
    LOADING = "loading"
    READY = "ready"


class DialogMode(str, Enum):
    CLOSED = "closed"
    ADD = "add"
    EDIT = "edit"


@dataclass(frozen=True)
class CategoryForm:
    name: str = ""
    slug: str = ""
    description: str = ""
    parent_id: str = NO_PARENT


@dataclass(frozen=True)
class PageState:
    phase: PagePhase = PagePhase.LOADING
    categories: Tuple[CategoryTreeNode, ...] = ()
    expanded: FrozenSet[str] = frozenset()
    dialog: DialogMode = DialogMode.CLOSED
    editing: Optional[CategoryResponse] = None
    form: CategoryForm = field(default_factory=CategoryForm)
    saving: bool = False
    deleting: FrozenSet[str] = frozenset()


# Network completions


def categories_loaded(
    state: PageState, categories: Sequence[CategoryTreeNode]
) -> PageState:
    """Replace the list and expand every returned category."""
    return replace(
        state,
        phase=PagePhase.READY,
        categories=tuple(categories),
        expanded=frozenset(category.id for category in categories),
    )


def save_started(state: PageState) -> PageState:
    return replace(state, saving=True)


def save_succeeded(state: PageState) -> PageState:
    return close_dialog(replace(state, saving=False))


def save_failed(state: PageState) -> PageState:
    """The dialog stays open with the user's input."""
    return replace(state, saving=False)


def delete_started(state: PageState, category_id: str) -> PageState:
    return replace(state, deleting=state.deleting | {category_id})


def delete_finished(state: PageState, category_id: str) -> PageState:
    return replace(state, deleting=state.deleting - {category_id})


# User events


def toggle_expand(state: PageState, category_id: str) -> PageState:
    return replace(state, expanded=state.expanded ^ {category_id})


def open_add_dialog(state: PageState) -> PageState:
    return replace(state, dialog=DialogMode.ADD, editing=None, form=CategoryForm())


def open_edit_dialog(state: PageState, category: CategoryResponse) -> PageState:
    form = CategoryForm(
        name=category.name,
        slug=category.slug,
        description=category.description,
        parent_id=category.parent_id or NO_PARENT,
    )
    return replace(state, dialog=DialogMode.EDIT, editing=category, form=form)


def close_dialog(state: PageState) -> PageState:
    return replace(state, dialog=DialogMode.CLOSED, editing=None, form=CategoryForm())


def change_name(state: PageState, name: str) -> PageState:
    """While adding, the slug follows the name; while editing it is left alone."""
    form = replace(state.form, name=name)
    if state.editing is None:
        form = replace(form, slug=generate_slug(name))
    return replace(state, form=form)


def change_slug(state: PageState, slug: str) -> PageState:
    return replace(state, form=replace(state.form, slug=slug))


def change_description(state: PageState, description: str) -> PageState:
    return replace(state, form=replace(state.form, description=description))


def change_parent(state: PageState, parent_id: Optional[str]) -> PageState:
    return replace(state, form=replace(state.form, parent_id=parent_id or NO_PARENT))


# Derived views


def build_payload(state: PageState) -> Dict[str, Any]:
    """JSON body for the create and update endpoints."""
    form = state.form
    return {
        "name": form.name,
        "slug": form.slug or generate_slug(form.name),
        "description": form.description,
        "parentId": None if form.parent_id == NO_PARENT else form.parent_id,
    }


def can_submit(state: PageState) -> bool:
    return bool(state.form.name) and not state.saving


def main_categories(state: PageState) -> List[CategoryTreeNode]:
    return [category for category in state.categories if category.parent_id is None]


def subcategory_total(state: PageState) -> int:
    return sum(len(category.children) for category in state.categories)


def parent_options(state: PageState) -> List[CategoryTreeNode]:
    """Main categories a category may be attached to, minus the one being edited."""
    editing_id = state.editing.id if state.editing else None
    return [
        category for category in main_categories(state) if category.id != editing_id
    ]


def summary(state: PageState) -> str:
    return (
        f"{len(main_categories(state))} main categories, "
        f"{subcategory_total(state)} subcategories"
    )


def delete_prompt(category: CategoryResponse) -> str:
    """Text for the confirmation dialog that must precede a delete."""
    children = len(getattr(category, "children", None) or [])
    target = f'"{category.name}"'
    if children:
        target += f" and its {children} subcategories"
    return (
        f"This will permanently delete {target}. "
        "Associated products will no longer be categorized."
    )
