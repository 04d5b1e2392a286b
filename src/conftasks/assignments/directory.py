# src/conftasks/assignments/directory.py

from __future__ import annotations

from collections.abc import Sequence

from ..schedule.models import Location, Person


def group_people_by_contact_for(people: Sequence[Person] | None) -> tuple[list[Person], list[Person]]:
    """
    Split the directory into (key_contacts, all_team).

    Key contacts are the people with a "contact for" responsibility.
    """
    if not people:
        return [], []
    key_contacts = [p for p in people if p.contact_for and p.contact_for.strip()]
    all_team = [p for p in people if not (p.contact_for and p.contact_for.strip())]
    return key_contacts, all_team


def search_people(people: Sequence[Person], query: str | None) -> list[Person]:
    if not query or not query.strip():
        return list(people)

    q = query.strip().lower()
    out: list[Person] = []
    for p in people:
        haystack = (p.name or "", p.role or "", p.contact_for or "", p.team or "")
        if any(q in h.lower() for h in haystack):
            out.append(p)
    return out


def search_locations(locations: Sequence[Location], query: str | None) -> list[Location]:
    if not query or not query.strip():
        return list(locations)

    q = query.strip().lower()
    return [loc for loc in locations if q in (loc.place or "").lower() or q in (loc.notes or "").lower()]
