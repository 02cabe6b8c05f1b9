"""
Helpers pour les sous-processus externes (ffprobe, ffmpeg).
"""

import asyncio
import contextlib


async def terminate_process(process: asyncio.subprocess.Process) -> None:
    """
    Tue et attend un sous-processus encore en cours.

    Sans effet si le processus est deja termine. Appele dans un bloc
    finally, y compris quand la tache est annulee.
    """
    if process.returncode is not None:
        return
    with contextlib.suppress(ProcessLookupError):
        process.kill()
    await process.wait()
