"""Data models for the diversity selector."""

from dataclasses import dataclass, field

from feedrank.models import Article


@dataclass
class TopStoriesSelection:
    """Result of hero + grid selection.

    Attributes:
        top_stories: Selected articles, hero first.
        remaining: Unselected articles in original rank order.
    """

    top_stories: list[Article] = field(default_factory=list)
    remaining: list[Article] = field(default_factory=list)

    @property
    def topic_count(self) -> int:
        """Distinct topics among the selected stories."""
        return len({a.topic_key for a in self.top_stories})


@dataclass
class TopicGroup:
    """Articles sharing one topic, in rank order.

    Attributes:
        topic: Topic key.
        articles: Articles in the group.
    """

    topic: str
    articles: list[Article] = field(default_factory=list)
