"""
Utility helpers for running the modelhooks blog example end-to-end.
"""

from __future__ import annotations

from typing import Any, Dict, List

from modelhooks import EventDispatcher, Model
from modelhooks.utils import qualified_name

from .models import Author, Post, PostPublished
from .observers import PostObserver


def bootstrap_events() -> Dict[str, Any]:
    """
    Install a dispatcher on every model and register the blog observers.
    """

    dispatcher = EventDispatcher()
    Model.set_event_dispatcher(dispatcher)
    observer = PostObserver()
    Post.observe(observer)

    saved_titles: List[str] = []

    def record_saved(event: PostPublished) -> None:
        saved_titles.append(event.model.title)

    dispatcher.listen(qualified_name(PostPublished), record_saved)
    return {"dispatcher": dispatcher, "observer": observer, "saved_titles": saved_titles}


def seed_sample_data() -> Dict[str, List[Dict[str, Any]]]:
    """
    Create an author and two posts, publishing only the one with a body.
    """

    author = Author(name="Alice Carter", email="alice@example.com")
    author.save()

    posts = [
        Post(title="Introducing Model Events", body="Observers, vetoes and payloads.", author_id=author.id),
        Post(title="Draft Notes", author_id=author.id),
    ]
    for post in posts:
        post.save()
        post.publish()

    return {
        "authors": [author.to_dict()],
        "posts": [post.to_dict() for post in posts],
    }


def run_demo() -> Dict[str, Any]:
    """
    Wire events, seed data and exercise delete/restore; return what happened.
    """

    context = bootstrap_events()
    try:
        seeded = seed_sample_data()
        published, draft = (Post.hydrate(**row) for row in seeded["posts"])
        published.delete()
        draft.delete()
        draft.restore()
        return {
            "audit": list(context["observer"].audit),
            "saved_titles": list(context["saved_titles"]),
            "posts": seeded["posts"],
        }
    finally:
        Model.unset_event_dispatcher()


if __name__ == "__main__":
    outcome = run_demo()
    for line in outcome["audit"]:
        print(line)
