"""
Lecture et ecriture des fichiers BIF (index de vignettes de navigation).

Format (entiers int32 little-endian) :
- octets 0-7   : signature 89 42 49 46 0D 0A 1A 0A
- octets 8-11  : version du format
- octets 12-15 : nombre d'images
- octets 16-19 : intervalle entre images en ms (0 = horodatages absolus)
- octets 20-63 : reserves
- table d'index : entrees (horodatage brut, offset absolu) de 8 octets,
  terminee par une sentinelle dont l'horodatage vaut -1
- donnees : l'image i occupe [offset_i, offset_i+1)

Usage:
    builder = BifFileBuilder(frame_interval_ms=5000)
    builder.append_frame(jpeg_bytes)
    builder.save(Path("index.bif"))

    with BifFileReader.open(Path("index.bif")) as reader:
        image = reader.read_frame(0)
"""

import bisect
import io
import mmap
import struct
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Optional, Union

from mediaingest.utils.constants import DEFAULT_FRAME_INTERVAL_MS

BIF_SIGNATURE = b"\x89BIF\r\n\x1a\n"
BIF_VERSION = 0
HEADER_SIZE = 64
INDEX_ENTRY_SIZE = 8
SENTINEL_TIMESTAMP = -1

_HEADER_STRUCT = struct.Struct("<8siii")
_INDEX_STRUCT = struct.Struct("<ii")
_INT32_MAX = 2**31 - 1

BifSource = Union[str, Path, bytes, bytearray, memoryview, BinaryIO]


class BifFormatError(ValueError):
    """Fichier BIF invalide (signature, entete ou table tronques)."""


@dataclass(frozen=True)
class BifHeader:
    """Entete d'un fichier BIF."""

    version: int
    image_count: int
    frame_interval_ms: int


@dataclass(frozen=True)
class BifIndexEntry:
    """
    Entree de la table d'index.

    Attributs:
        timestamp_ms: Horodatage logique (brut x intervalle), -1 pour la sentinelle
        offset: Offset absolu des donnees de l'image
    """

    timestamp_ms: int
    offset: int

    @property
    def is_sentinel(self) -> bool:
        return self.timestamp_ms == SENTINEL_TIMESTAMP


@dataclass(frozen=True)
class BifFrame:
    """Image lue depuis un fichier BIF."""

    index: int
    timestamp_ms: int
    data: bytes


class BifFileReader:
    """
    Lecteur BIF a acces aleatoire.

    L'entete et la table d'index sont lus a l'ouverture ; les images sont
    lues a la demande. Chaque lecture decoupe une vue independante du
    contenu (mmap ou memoire), sans curseur partage : les images peuvent
    etre lues dans n'importe quel ordre, y compris depuis plusieurs threads.
    """

    def __init__(
        self,
        buffer: memoryview,
        header: BifHeader,
        entries: list[BifIndexEntry],
        resources: tuple = (),
    ) -> None:
        self._buffer = buffer
        self._header = header
        self._entries = entries
        self._timestamps = [entry.timestamp_ms for entry in entries[:-1]]
        self._resources = resources

    @classmethod
    def open(cls, source: BifSource) -> "BifFileReader":
        """
        Ouvre un fichier BIF.

        Args:
            source: Chemin ou fichier ouvert (projetes en memoire), octets,
                BytesIO (sans copie) ou autre flux binaire (lu en entier)

        Returns:
            Lecteur pret a l'emploi (a fermer apres usage)

        Raises:
            BifFormatError: Si la signature ou la table d'index est invalide
        """
        resources: tuple = ()
        if isinstance(source, (str, Path)):
            handle = open(source, "rb")
            try:
                mapped = mmap.mmap(handle.fileno(), 0, access=mmap.ACCESS_READ)
            except ValueError:
                # Fichier vide : mmap refuse une longueur nulle
                handle.close()
                raise BifFormatError(f"Fichier BIF vide: {source}") from None
            buffer = memoryview(mapped)
            resources = (buffer, mapped, handle)
        elif isinstance(source, (bytes, bytearray, memoryview)):
            buffer = memoryview(source).cast("B")
        else:
            buffer, resources = _stream_view(source)

        try:
            header, entries = _parse_index(buffer)
        except BifFormatError:
            _release(resources)
            raise
        return cls(buffer, header, entries, resources)

    @property
    def header(self) -> BifHeader:
        return self._header

    @property
    def entries(self) -> list[BifIndexEntry]:
        """Table d'index, sentinelle comprise."""
        return list(self._entries)

    @property
    def frame_count(self) -> int:
        """Nombre d'images lisibles (entrees hors sentinelle)."""
        return len(self._entries) - 1

    def read_frame(self, index: int) -> bytes:
        """
        Lit les octets de l'image d'indice `index`.

        Raises:
            IndexError: Si l'indice atteint la sentinelle ou est negatif
        """
        if index < 0 or index >= len(self._entries) - 1:
            raise IndexError(
                f"Image {index} hors limites (0..{len(self._entries) - 2})"
            )
        start = self._entries[index].offset
        end = self._entries[index + 1].offset
        return bytes(self._buffer[start:end])

    def frame(self, index: int) -> BifFrame:
        """Lit une image avec son horodatage."""
        data = self.read_frame(index)
        return BifFrame(index, self._entries[index].timestamp_ms, data)

    def frames(self) -> Iterator[BifFrame]:
        """Parcourt toutes les images dans l'ordre de la table."""
        for index in range(self.frame_count):
            yield self.frame(index)

    def find_frame_index(self, timestamp_ms: int) -> Optional[int]:
        """
        Indice de la derniere image dont l'horodatage est <= timestamp_ms.

        Returns:
            L'indice, ou None si le fichier est vide ou si l'horodatage
            precede la premiere image
        """
        position = bisect.bisect_right(self._timestamps, timestamp_ms)
        return position - 1 if position > 0 else None

    def close(self) -> None:
        """Libere la projection memoire et le fichier sous-jacent."""
        _release(self._resources)
        self._resources = ()

    def __enter__(self) -> "BifFileReader":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


class BifFileBuilder:
    """
    Construit un fichier BIF a partir d'images ajoutees dans l'ordre.

    Avec un intervalle > 0, les horodatages doivent etre des multiples de
    l'intervalle ; la table stocke l'horodatage divise par l'intervalle.
    Avec un intervalle de 0, la table stocke les horodatages absolus.

    Attributs:
        frame_interval_ms: Intervalle entre deux images (ms)
        version: Version du format ecrite dans l'entete
    """

    def __init__(
        self,
        frame_interval_ms: int = DEFAULT_FRAME_INTERVAL_MS,
        version: int = BIF_VERSION,
    ) -> None:
        if frame_interval_ms < 0:
            raise ValueError("frame_interval_ms doit etre >= 0")
        self.frame_interval_ms = frame_interval_ms
        self.version = version
        self._frames: list[bytes] = []
        self._timestamps: list[int] = []

    def __len__(self) -> int:
        return len(self._frames)

    def append_frame(self, data: bytes, timestamp_ms: Optional[int] = None) -> int:
        """
        Ajoute une image.

        Args:
            data: Octets de l'image (JPEG), non vides
            timestamp_ms: Horodatage ; par defaut, image suivante selon l'intervalle

        Returns:
            L'horodatage retenu

        Raises:
            ValueError: Image vide, horodatage non croissant ou non aligne
        """
        if not data:
            raise ValueError("Une image BIF ne peut pas etre vide")

        if timestamp_ms is None:
            if self.frame_interval_ms == 0:
                raise ValueError("timestamp_ms requis quand l'intervalle vaut 0")
            if self._timestamps:
                timestamp_ms = self._timestamps[-1] + self.frame_interval_ms
            else:
                timestamp_ms = 0

        if timestamp_ms < 0:
            raise ValueError(f"Horodatage negatif: {timestamp_ms}")
        if self._timestamps and timestamp_ms <= self._timestamps[-1]:
            raise ValueError(
                f"Horodatage {timestamp_ms} non croissant "
                f"(precedent: {self._timestamps[-1]})"
            )
        if self.frame_interval_ms and timestamp_ms % self.frame_interval_ms:
            raise ValueError(
                f"Horodatage {timestamp_ms} non multiple de {self.frame_interval_ms}"
            )

        self._frames.append(bytes(data))
        self._timestamps.append(timestamp_ms)
        return timestamp_ms

    def append_frame_file(self, path: Path, timestamp_ms: Optional[int] = None) -> int:
        """Ajoute une image lue depuis un fichier."""
        return self.append_frame(path.read_bytes(), timestamp_ms)

    def to_bytes(self) -> bytes:
        """Serialise le fichier BIF complet."""
        output = io.BytesIO()
        self.write(output)
        return output.getvalue()

    def save(self, destination: Path) -> Path:
        """Ecrit le fichier BIF sur disque (repertoires parents crees)."""
        destination.parent.mkdir(parents=True, exist_ok=True)
        with open(destination, "wb") as output:
            self.write(output)
        return destination

    def write(self, output: BinaryIO) -> None:
        """Ecrit entete, table d'index, sentinelle puis images."""
        frame_count = len(self._frames)
        data_offset = HEADER_SIZE + INDEX_ENTRY_SIZE * (frame_count + 1)
        data_end = data_offset + sum(len(frame) for frame in self._frames)
        if data_end > _INT32_MAX:
            raise ValueError("Fichier BIF trop volumineux pour des offsets int32")

        header = _HEADER_STRUCT.pack(
            BIF_SIGNATURE, self.version, frame_count, self.frame_interval_ms
        )
        output.write(header.ljust(HEADER_SIZE, b"\x00"))

        offset = data_offset
        for frame, timestamp_ms in zip(self._frames, self._timestamps):
            raw = timestamp_ms
            if self.frame_interval_ms:
                raw = timestamp_ms // self.frame_interval_ms
            output.write(_INDEX_STRUCT.pack(raw, offset))
            offset += len(frame)
        output.write(_INDEX_STRUCT.pack(SENTINEL_TIMESTAMP, offset))

        for frame in self._frames:
            output.write(frame)


def _parse_index(buffer: memoryview) -> tuple[BifHeader, list[BifIndexEntry]]:
    if len(buffer) < HEADER_SIZE:
        raise BifFormatError("Entete BIF tronque")
    signature, version, image_count, interval = _HEADER_STRUCT.unpack_from(buffer, 0)
    if signature != BIF_SIGNATURE:
        raise BifFormatError("Signature BIF invalide")
    header = BifHeader(version, image_count, interval)

    entries: list[BifIndexEntry] = []
    position = HEADER_SIZE
    while True:
        if position + INDEX_ENTRY_SIZE > len(buffer):
            raise BifFormatError("Table d'index BIF sans sentinelle")
        raw, offset = _INDEX_STRUCT.unpack_from(buffer, position)
        position += INDEX_ENTRY_SIZE
        if raw == SENTINEL_TIMESTAMP:
            entries.append(BifIndexEntry(SENTINEL_TIMESTAMP, offset))
            break
        timestamp_ms = raw * interval if interval > 0 else raw
        entries.append(BifIndexEntry(timestamp_ms, offset))

    previous = -1
    for entry in entries:
        if entry.offset <= previous or entry.offset > len(buffer):
            raise BifFormatError(f"Offset BIF invalide: {entry.offset}")
        previous = entry.offset
    return header, entries


def _release(resources: tuple) -> None:
    for resource in resources:
        if isinstance(resource, memoryview):
            resource.release()
        else:
            resource.close()


def _stream_view(stream: BinaryIO) -> tuple[memoryview, tuple]:
    """
    Vue sur le contenu d'un flux binaire, depuis son debut.

    Un BytesIO est expose sans copie, un fichier est projete en memoire
    via son descripteur ; le flux reste la propriete de l'appelant. Les
    flux non projetables (pipe, socket) sont lus integralement.
    """
    if isinstance(stream, io.BytesIO):
        buffer = stream.getbuffer()
        return buffer, (buffer,)

    try:
        fileno = stream.fileno()
    except (AttributeError, OSError):
        return memoryview(stream.read()), ()

    try:
        mapped = mmap.mmap(fileno, 0, access=mmap.ACCESS_READ)
    except ValueError:
        raise BifFormatError("Flux BIF vide") from None
    except OSError:
        # Descripteur non projetable (pipe)
        return memoryview(stream.read()), ()
    buffer = memoryview(mapped)
    return buffer, (buffer, mapped)
