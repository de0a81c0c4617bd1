"""
Blog-style sample application showcasing modelhooks observers.
"""

from .demo import bootstrap_events, run_demo, seed_sample_data
from .models import Author, Post, PostPublished
from .observers import PostObserver, slugify

__all__ = [
    "Author",
    "Post",
    "PostObserver",
    "PostPublished",
    "bootstrap_events",
    "run_demo",
    "seed_sample_data",
    "slugify",
]
