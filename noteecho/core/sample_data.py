"""Sample library used when no highlight export is configured."""

from __future__ import annotations

from datetime import datetime, timedelta

from noteecho.providers.content_types import Book, Highlight

# (asset_id, title, author, [(content, note, chapter, days_ago), ...])
SAMPLE_BOOKS: list[tuple[str, str, str, list[tuple[str, str | None, str, int]]]] = [
    (
        "atomic-habits-001",
        "Atomic Habits",
        "James Clear",
        [
            ("You do not rise to the level of your goals. You fall to the level of your systems.",
             None, "Chapter 1: The Surprising Power of Atomic Habits", 30),
            ("Every action you take is a vote for the type of person you wish to become.",
             "This really resonates with identity-based habits", "Chapter 2: How Your Habits Shape Your Identity", 25),
            ("The most effective way to change your habits is to focus not on what you want to achieve, "
             "but on who you wish to become.",
             None, "Chapter 2: How Your Habits Shape Your Identity", 20),
            ("Make it obvious, make it attractive, make it easy, make it satisfying.",
             "The four laws of behavior change", "Chapter 3: How to Build Better Habits", 15),
            ("Environment is the invisible hand that shapes human behavior.",
             None, "Chapter 6: Motivation Is Overrated", 10),
        ],
    ),
    (
        "psychology-money-002",
        "The Psychology of Money",
        "Morgan Housel",
        [
            ("Doing well with money has a little to do with how smart you are and a lot to do with how you behave.",
             None, "Introduction", 35),
            ("Your personal experiences with money make up maybe 0.00000001% of what's happened in the world, "
             "but maybe 80% of how you think the world works.",
             None, "Chapter 1: No One's Crazy", 28),
            ("Getting money and keeping money are two different skills.",
             "Important distinction", "Chapter 4: Confounding Compounding", 22),
            ("The hardest financial skill is getting the goalpost to stop moving.",
             None, "Chapter 2: Luck & Risk", 18),
        ],
    ),
    (
        "thinking-fast-slow-003",
        "Thinking, Fast and Slow",
        "Daniel Kahneman",
        [
            ("A reliable way to make people believe in falsehoods is frequent repetition, "
             "because familiarity is not easily distinguished from truth.",
             None, "Chapter 5: Cognitive Ease", 40),
            ("Nothing in life is as important as you think it is, while you are thinking about it.",
             None, "Chapter 13: Availability and Affect", 32),
            ("The confidence that individuals have in their beliefs depends mostly on the quality of the story "
             "they can tell about what they see.",
             "Narrative fallacy", "Chapter 7: A Machine for Jumping to Conclusions", 26),
            ("We can be blind to the obvious, and we are also blind to our blindness.",
             None, "Introduction", 19),
        ],
    ),
    (
        "deep-work-004",
        "Deep Work",
        "Cal Newport",
        [
            ("Human beings, it seems, are at their best when immersed deeply in something challenging.",
             None, "Introduction", 14),
            ("The ability to perform deep work is becoming increasingly rare at exactly the same time "
             "it is becoming increasingly valuable in our economy.",
             "Key insight about modern economy", "Chapter 1: Deep Work Is Valuable", 12),
            ("Clarity about what matters provides clarity about what does not.",
             None, "Rule #3: Quit Social Media", 8),
            ("The deep life is not just economically lucrative, but also a life well lived.",
             None, "Conclusion", 5),
        ],
    ),
    (
        "sapiens-005",
        "Sapiens: A Brief History of Humankind",
        "Yuval Noah Harari",
        [
            ("The real difference between us and chimpanzees is the mysterious glue that enables millions "
             "of humans to cooperate effectively.",
             None, "Chapter 1: An Animal of No Significance", 45),
            ("Culture tends to argue that it forbids only that which is unnatural. "
             "But from a biological perspective, nothing is unnatural.",
             None, "Chapter 8: There Is No Justice in History", 38),
            ("We study history not to predict the future, but to free ourselves of the past "
             "and imagine alternative destinies.",
             "Great perspective on learning history", "Chapter 4: The Flood", 33),
            ("One of history's few iron laws is that luxuries tend to become necessities "
             "and to spawn new obligations.",
             None, "Chapter 5: History's Biggest Fraud", 27),
        ],
    ),
]


def sample_library(now: datetime) -> tuple[list[Book], list[Highlight]]:
    """Build the sample books and highlights, dated relative to now."""
    books: list[Book] = []
    highlights: list[Highlight] = []
    for asset_id, title, author, entries in SAMPLE_BOOKS:
        book = Book(id=asset_id, title=title, author=author, asset_id=asset_id, highlight_count=len(entries))
        books.append(book)
        for index, (content, note, chapter, days_ago) in enumerate(entries, start=1):
            highlights.append(
                Highlight(
                    id=f"{asset_id}-{index}",
                    content=content,
                    note=note,
                    chapter=chapter,
                    created_date=now - timedelta(days=days_ago),
                    book=book,
                )
            )
    return books, highlights
