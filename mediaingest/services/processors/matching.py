"""
Selection de la meilleure correspondance et resolution d'un candidat.

Scoring des candidats (hors titre identique) :
- sans annee : 100% titre
- avec annee : 75% titre + 25% annee
"""

from collections.abc import Sequence
from pathlib import Path
from typing import Optional, Union

from loguru import logger
from rapidfuzz import fuzz, utils

from mediaingest.core.ports.metadata_provider import ImportMetadataRequest, MetadataQuery
from mediaingest.core.value_objects.media_kind import MediaKind
from mediaingest.core.value_objects.outcomes import (
    ErrorMatchNotFound,
    ErrorPersistenceFailure,
    ErrorProviderFailure,
    ImportOutcome,
    ImportSuccess,
    MatchErrorDatabase,
    MatchErrorProviderFailure,
    MatchSuccess,
    MetadataMatch,
)
from mediaingest.services.metadata_resolver import MetadataResolver


def _year_score(query_year: Optional[int], candidate_year: Optional[int]) -> float:
    """100 pour +/-1 an, -25 par annee d'ecart supplementaire."""
    if query_year is None or candidate_year is None:
        return 0.0
    diff = abs(query_year - candidate_year)
    if diff <= 1:
        return 100.0
    return max(0.0, 100.0 - (diff - 1) * 25)


def score_match(query: str, year: Optional[int], match: MetadataMatch) -> float:
    """Score de correspondance (0-100) d'un candidat."""
    title_score = fuzz.token_sort_ratio(
        query, match.record.title, processor=utils.default_process
    )
    if year is None:
        return title_score
    return title_score * 0.75 + _year_score(year, match.record.year) * 0.25


def select_best_match(
    query: str, year: Optional[int], matches: Sequence[MetadataMatch]
) -> Optional[MetadataMatch]:
    """
    Choisit le candidat le plus proche.

    Un titre identique (sans tenir compte de la casse) l'emporte, en
    preferant celui dont l'annee correspond. Sinon, le meilleur score ;
    a egalite, l'ordre du fournisseur est conserve.
    """
    if not matches:
        return None
    wanted = query.casefold()
    exact = [m for m in matches if m.record.title.casefold() == wanted]
    if exact:
        if year is not None:
            for match in exact:
                if match.record.year == year:
                    return match
        return exact[0]
    return max(matches, key=lambda m: score_match(query, year, m))


async def resolve_match(
    resolver: MetadataResolver,
    media_kind: MediaKind,
    query: str,
    year: Optional[int],
    path: Path,
) -> Union[MetadataMatch, ImportOutcome]:
    """
    Recherche un titre puis importe (ou reutilise) la meilleure entree.

    Le premier fournisseur ayant retourne des correspondances est retenu.

    Returns:
        La correspondance importee (avec saisons et episodes pour une
        serie), ou le resultat d'erreur a retourner tel quel
    """
    results = await resolver.search(MetadataQuery(media_kind, query=query, year=year))
    successes = [r for r in results if isinstance(r, MatchSuccess) and r.matches]
    if not successes:
        db_errors = [r for r in results if isinstance(r, MatchErrorDatabase)]
        provider_errors = [r for r in results if isinstance(r, MatchErrorProviderFailure)]
        if db_errors:
            return ErrorPersistenceFailure("; ".join(r.detail for r in db_errors))
        if provider_errors and len(provider_errors) == len(results):
            return ErrorProviderFailure(
                "; ".join(f"{r.provider_id}: {r.detail}" for r in provider_errors)
            )
        logger.info(f"Aucune correspondance pour '{query}' ({path})")
        return ErrorMatchNotFound(str(path), query)

    match = select_best_match(query, year, successes[0].matches)
    outcomes = await resolver.import_metadata(
        ImportMetadataRequest(
            metadata_ids=(match.remote_metadata_id,),
            provider_id=match.provider_id,
            media_kind=media_kind,
            year=year,
        )
    )
    for outcome in outcomes:
        if isinstance(outcome, ImportSuccess) and outcome.match is not None:
            return outcome.match
    for outcome in outcomes:
        if isinstance(outcome, (ErrorPersistenceFailure, ErrorProviderFailure)):
            return outcome
    return ErrorMatchNotFound(str(path), query)
