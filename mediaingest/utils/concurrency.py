"""
Helpers de concurrence bornee pour les traitements par lot.

Les imports et analyses parallelisent des operations I/O (API, disque,
sous-processus) avec une borne fixe pour ne pas saturer les APIs externes
ni lancer un nombre illimite de processus ffprobe/ffmpeg.
"""

import asyncio
from collections.abc import AsyncIterator, Awaitable, Callable, Iterable
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")


async def gather_bounded(
    items: Iterable[T],
    func: Callable[[T], Awaitable[R]],
    concurrency: int,
) -> list[R]:
    """
    Applique func a chaque element avec au plus `concurrency` appels simultanes.

    Les resultats sont retournes dans l'ordre des elements en entree.

    Args:
        items: Elements a traiter
        func: Coroutine appliquee a chaque element
        concurrency: Nombre maximum d'appels en parallele (>= 1)

    Returns:
        Liste des resultats, dans l'ordre d'entree
    """
    if concurrency < 1:
        raise ValueError("concurrency doit etre >= 1")
    semaphore = asyncio.Semaphore(concurrency)

    async def run(item: T) -> R:
        async with semaphore:
            return await func(item)

    return list(await asyncio.gather(*(run(item) for item in items)))


async def map_as_completed(
    items: Iterable[T],
    func: Callable[[T], Awaitable[R]],
    concurrency: int,
) -> AsyncIterator[R]:
    """
    Applique func avec une borne de concurrence et produit les resultats
    au fur et a mesure de leur completion.

    Si le consommateur arrete l'iteration (aclose ou annulation),
    les taches encore en attente sont annulees.

    Args:
        items: Elements a traiter
        func: Coroutine appliquee a chaque element
        concurrency: Nombre maximum d'appels en parallele (>= 1)

    Yields:
        Resultats dans l'ordre de completion
    """
    if concurrency < 1:
        raise ValueError("concurrency doit etre >= 1")
    semaphore = asyncio.Semaphore(concurrency)

    async def run(item: T) -> R:
        async with semaphore:
            return await func(item)

    tasks = [asyncio.ensure_future(run(item)) for item in items]
    try:
        for next_done in asyncio.as_completed(tasks):
            yield await next_done
    finally:
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)
