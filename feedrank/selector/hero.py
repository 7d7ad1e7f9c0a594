"""Hero + grid selection over an already ranked article list.

Selection runs in two phases:

1. Greedy forward pass. Rank 1 is always the hero. Each further slot takes
   the best-ranked unused candidate whose source has fewer than two picks,
   preferring the first one that adds a new topic.
2. One backward repair pass. If fewer than three topics made it in, walk
   the non-hero slots from the bottom and swap a slot whose topic is
   covered elsewhere for the best-ranked unused candidate bringing a new
   topic, until three topics are reached or the pass ends.

The repair pass is deliberately single and best-effort. It can finish
below three topics even when some other arrangement would reach it.
"""

from collections import Counter
from collections.abc import Sequence

import structlog

from feedrank.models import Article
from feedrank.selector.models import TopicGroup, TopStoriesSelection
from feedrank.selector.publication import source_key


logger = structlog.get_logger()

MAX_PER_SOURCE = 2
MIN_TOPICS = 3
DEFAULT_COUNT = 5


def select_diverse_top_stories(
    ranked: Sequence[Article],
    count: int = DEFAULT_COUNT,
) -> TopStoriesSelection:
    """Select a source- and topic-diverse hero + grid set.

    Args:
        ranked: Articles in rank order (best first).
        count: Number of stories to select.

    Returns:
        Selected stories and the unselected remainder in rank order.

    Raises:
        ValueError: If count is smaller than 1.
    """
    if count < 1:
        msg = f"count must be >= 1, got {count}"
        raise ValueError(msg)

    if len(ranked) <= count:
        return TopStoriesSelection(top_stories=list(ranked), remaining=[])

    slots = _greedy_pass(ranked, count)
    if len(slots) >= count:
        _repair_pass(ranked, slots)

    chosen = set(slots)
    selection = TopStoriesSelection(
        top_stories=[ranked[i] for i in slots],
        remaining=[a for i, a in enumerate(ranked) if i not in chosen],
    )

    logger.debug(
        "top_stories_selected",
        component="selector",
        subcomponent="hero",
        selected=len(selection.top_stories),
        topics=selection.topic_count,
    )
    return selection


def _greedy_pass(ranked: Sequence[Article], count: int) -> list[int]:
    """Phase 1: fill slots in rank order under the per-source cap.

    Returns:
        Indices into ``ranked`` of the selected articles, hero first.
    """
    slots = [0]
    used = {0}
    source_counts: Counter[str] = Counter({source_key(ranked[0]): 1})
    topics_seen = {ranked[0].topic_key}

    for _ in range(1, count):
        best = -1
        first_valid = -1

        for i in range(1, len(ranked)):
            if i in used:
                continue
            candidate = ranked[i]
            if source_counts[source_key(candidate)] >= MAX_PER_SOURCE:
                continue
            if first_valid == -1:
                first_valid = i
            if candidate.topic_key not in topics_seen:
                best = i
                break

        if best == -1:
            best = first_valid

        # Nothing satisfies the source cap: take the next unused article
        if best == -1:
            best = next((i for i in range(1, len(ranked)) if i not in used), -1)

        if best == -1:
            break

        chosen = ranked[best]
        slots.append(best)
        used.add(best)
        source_counts[source_key(chosen)] += 1
        topics_seen.add(chosen.topic_key)

    return slots


def _repair_pass(ranked: Sequence[Article], slots: list[int]) -> None:
    """Phase 2: one backward pass of topic-raising swaps, in place."""
    topics = {ranked[i].topic_key for i in slots}
    if len(topics) >= MIN_TOPICS:
        return

    used = set(slots)

    for pos in range(len(slots) - 1, 0, -1):
        others = [ranked[i] for p, i in enumerate(slots) if p != pos]
        topics_without = {a.topic_key for a in others}
        if len(topics_without) < len(topics):
            # this slot holds the only article of its topic
            continue

        other_sources = Counter(source_key(a) for a in others)
        for j, candidate in enumerate(ranked):
            if j in used or candidate.topic_key in topics_without:
                continue
            if other_sources[source_key(candidate)] >= MAX_PER_SOURCE:
                continue
            used.discard(slots[pos])
            used.add(j)
            slots[pos] = j
            topics = topics_without | {candidate.topic_key}
            break

        if len(topics) >= MIN_TOPICS:
            return


def group_by_topic(articles: Sequence[Article]) -> list[TopicGroup]:
    """Group articles by topic, keeping rank order inside each group.

    Args:
        articles: Articles in rank order.

    Returns:
        Groups ordered by size, largest first; equal sizes keep first-seen order.
    """
    groups: dict[str, TopicGroup] = {}
    for article in articles:
        key = article.topic_key
        if key not in groups:
            groups[key] = TopicGroup(topic=key)
        groups[key].articles.append(article)

    return sorted(groups.values(), key=lambda g: len(g.articles), reverse=True)
