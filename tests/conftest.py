"""Shared fixtures for ishmael tests."""

import pytest

import ishmael

MOBY_DICK = (
    "MOBY-DICK; or, THE WHALE.\n\n"
    "CHAPTER 1. Loomings.\n\n"
    "Call me Ishmael. Some years ago, never mind how long precisely, "
    "having little or no money in my purse, I thought I would sail about "
    "a little and see the watery part of the world.\n\n"
    "CHAPTER 2. The Carpet-Bag.\n\n"
    "I stuffed a shirt or two into my old carpet-bag, tucked it under my "
    "arm, and started for Cape Horn and the Pacific. The whale's tail "
    "rose, and the whale sounded.\n\n"
    "CHAPTER 3. The Spouter-Inn.\n\n"
    "Entering that gable-ended Spouter-Inn, you found yourself in a wide, "
    "low, straggling entry. Ahab! The whale, the whale! Don't you see "
    "the whale, Ahab?\n"
)

INAUGURAL = {
    "1789-Washington": (
        "Among the vicissitudes incident to life no event could have filled "
        "me with greater anxieties. The american people have placed their "
        "confidence in the free government of the people."
    ),
    "1793-Washington": (
        "Fellow citizens, I am again called upon by the voice of my country "
        "to execute the functions of its Chief Magistrate, and the people "
        "of this american nation expect it."
    ),
}


@pytest.fixture
def moby_text():
    return MOBY_DICK


@pytest.fixture
def inaugural():
    """Two-document corpus."""
    return ishmael.Corpus(INAUGURAL)


@pytest.fixture
def chapters():
    """Moby Dick segmented into front matter plus three chapters."""
    return ishmael.Corpus({"moby": MOBY_DICK}).segment(r"CHAPTER\s\d+")
