"""
Resolution des metadonnees aupres des fournisseurs enregistres.

MetadataResolver repartit les recherches vers les fournisseurs qui
supportent le type demande, relit les identifiants distants canoniques
et delegue les imports au fournisseur nomme.
"""

import asyncio
from collections.abc import Sequence
from typing import Optional

from loguru import logger

from mediaingest.core.ports.metadata_provider import (
    IMetadataProvider,
    ImportMetadataRequest,
    MetadataQuery,
    TvShowExtras,
)
from mediaingest.core.value_objects.media_kind import MediaKind
from mediaingest.core.value_objects.outcomes import (
    ImportOutcome,
    MatchErrorProviderFailure,
    MatchErrorProviderNotFound,
    MatchResult,
)
from mediaingest.core.value_objects.remote_id import RemoteId


class MetadataResolver:
    """
    Point d'entree unique vers les fournisseurs de metadonnees.

    Les fournisseurs sont traites uniformement : l'ordre d'enregistrement
    determine l'ordre des resultats concatenes.

    Attributs:
        providers: Fournisseurs enregistres
    """

    def __init__(self, providers: Sequence[IMetadataProvider]) -> None:
        self.providers = list(providers)

    def get_provider(self, provider_id: str) -> Optional[IMetadataProvider]:
        """Fournisseur par identifiant (insensible a la casse)."""
        wanted = provider_id.lower()
        for provider in self.providers:
            if provider.id == wanted:
                return provider
        return None

    async def search(self, query: MetadataQuery) -> list[MatchResult]:
        """
        Recherche aupres d'un fournisseur ou de tous ceux du type demande.

        Les listes de chaque fournisseur sont concatenees sans fusion ni
        tri. L'echec d'un fournisseur produit une entree d'erreur pour ce
        seul fournisseur, les autres resultats sont conserves.

        Args:
            query: Requete ; si provider_id est renseigne, seul ce fournisseur
                est interroge

        Returns:
            Un resultat par fournisseur interroge (liste vide si le
            fournisseur demande n'existe pas)
        """
        if query.provider_id is not None:
            provider = self.get_provider(query.provider_id)
            targets = [provider] if provider else []
        else:
            targets = [p for p in self.providers if query.media_kind in p.media_kinds]

        if not targets:
            logger.debug(f"Aucun fournisseur pour {query.media_kind.value}")
            return []

        return list(
            await asyncio.gather(*(self._search_one(p, query) for p in targets))
        )

    async def _search_one(
        self, provider: IMetadataProvider, query: MetadataQuery
    ) -> MatchResult:
        try:
            return await provider.search(query)
        except Exception as e:
            logger.exception(f"Fournisseur {provider.id}: recherche en echec")
            return MatchErrorProviderFailure(provider.id, str(e) or type(e).__name__)

    async def resolve_by_remote_id(self, remote_id: str) -> MatchResult:
        """
        Recherche l'entree designee par un identifiant distant.

        Args:
            remote_id: "provider:kind:id", ou pour une serie
                "provider:tv:<showId>[-<saison>[-<episode>]]"

        Returns:
            Le premier resultat du fournisseur, ou MatchErrorProviderNotFound

        Raises:
            ValueError: Si l'identifiant est mal forme
        """
        parsed = RemoteId.parse(remote_id)
        extras = None
        if parsed.media_kind is MediaKind.TV and parsed.season_number is not None:
            extras = TvShowExtras(parsed.season_number, parsed.episode_number)

        results = await self.search(
            MetadataQuery(
                media_kind=parsed.media_kind,
                provider_id=parsed.provider_id,
                metadata_id=parsed.metadata_id,
                extras=extras,
            )
        )
        return results[0] if results else MatchErrorProviderNotFound()

    async def import_metadata(self, request: ImportMetadataRequest) -> list[ImportOutcome]:
        """
        Delegue un import au fournisseur nomme.

        Un fournisseur inconnu produit une liste vide (pas une erreur).
        """
        provider = self.get_provider(request.provider_id)
        if provider is None:
            logger.warning(
                f"Import ignore: fournisseur inconnu '{request.provider_id}'"
            )
            return []
        return await provider.import_metadata(request)
