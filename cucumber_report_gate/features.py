"""Merging and ordering of report features."""

from collections.abc import Sequence

from cucumber_report_gate.models.report import Element, Feature


def merge_features_by_id(features: Sequence[Feature]) -> list[Feature]:
    """Merge features sharing an ``id`` into one feature per id.

    The first feature seen for an id keeps its metadata and its position;
    the scenarios of later features with the same id are appended in the
    order those features appear. Scenarios are not deduplicated.
    """
    groups: dict[str, tuple[Feature, list[Element]]] = {}
    for feature in features:
        if feature.id in groups:
            groups[feature.id][1].extend(feature.elements)
        else:
            groups[feature.id] = (feature, list(feature.elements))

    return [
        first.model_copy(update={"elements": elements})
        for first, elements in groups.values()
    ]


def sort_features_alphabetically(features: Sequence[Feature]) -> list[Feature]:
    """Sort features by name, ignoring case. Ties keep their input order."""
    return sorted(features, key=lambda feature: feature.name.lower())
