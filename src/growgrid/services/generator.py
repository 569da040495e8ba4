"""AI keyframe generation.

A generator turns a ``GenerationRequest`` into a raw list of keyframe
candidates. ``GeneratorService`` validates those candidates and writes them
into one day of a ``KeyframeStore``. Nothing is written unless the whole
response is usable.
"""

import logging
import threading
from typing import Any, Protocol

import requests
from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from growgrid.exceptions import GenerationError
from growgrid.models import (
    CYCLE_DURATION,
    DEFAULT_GRID_SIZE,
    Cell,
    Intensity,
    Keyframe,
    Pulsing,
    resize_grid,
)
from growgrid.models.config import GeneratorConfig

logger = logging.getLogger(__name__)


class GenerationRequest(BaseModel):
    """What the user asked the generator for."""

    grid_size: int = Field(default=DEFAULT_GRID_SIZE, ge=1, description="Grid width/height")
    cycle_duration: int = Field(default=CYCLE_DURATION, description="Minutes in one day")
    plant_type: str = Field(default="Basil", description="Crop being grown")
    goal: str = Field(
        default="Maximize biomass for basil microgreens with strong purple coloration.",
        description="Free-text growth goal",
    )
    intensity: Intensity = Field(default=Intensity.MEDIUM, description="Overall light level")
    pulsing: Pulsing = Field(default=Pulsing.NONE, description="Pulsing behaviour")


RESPONSE_SCHEMA: dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "name": {"type": "string"},
            "time": {"type": "integer"},
            "grid": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "r": {"type": "integer"},
                        "g": {"type": "integer"},
                        "b": {"type": "integer"},
                        "active": {"type": "boolean"},
                    },
                    "required": ["r", "g", "b", "active"],
                },
            },
        },
        "required": ["name", "time", "grid"],
    },
}


def build_prompt(request: GenerationRequest) -> str:
    """Build the natural-language prompt for a generation request."""
    cells = request.grid_size * request.grid_size
    last = request.cycle_duration - 1
    return f"""\
You are an expert horticultural lighting scientist. Generate a 24-hour lighting \
recipe as a series of keyframes for a plant growth application.

Constraints:
- Total cycle duration: {request.cycle_duration} minutes (one day).
- LED grid size: {request.grid_size}x{request.grid_size}. For uniform recipes every \
cell of a keyframe has the same colour and active state; vary cells for spatial patterns.
- Output ONLY a JSON array of keyframe objects, with no other text or markdown.

Request:
- Plant type: {request.plant_type}
- Primary goal: {request.goal}
- Desired light intensity: {request.intensity.value} (Low, Medium, High or Very High \
PAR levels, translated into RGB brightness).
- Pulsing behaviour: {request.pulsing.value} (if not 'None', add keyframes with rapid \
on/off or colour changes to simulate pulsing).

Each keyframe object:
{{"time": integer 0-{last}, "name": string, "grid": array of exactly {cells} cells}}

Each cell object:
{{"r": 0-255, "g": 0-255, "b": 0-255, "active": boolean}}

Example:
[
  {{"time": 360, "name": "Dawn", "grid": [{{"r":255,"g":100,"b":50,"active":true}}, ... ({cells - 1} more)]}},
  {{"time": 720, "name": "Midday", "grid": [{{"r":255,"g":255,"b":255,"active":true}}, ... ({cells - 1} more)]}},
  {{"time": 1200, "name": "Night", "grid": [{{"r":0,"g":0,"b":0,"active":false}}, ... ({cells - 1} more)]}}
]
"""


class KeyframeGenerator(Protocol):
    """Anything that can turn a request into raw keyframe candidates."""

    def generate(self, request: GenerationRequest) -> list[dict[str, Any]]:
        """
        Produce keyframe candidates.

        Raises:
            GenerationError: If the backend fails or returns non-JSON
        """
        ...


class HttpKeyframeGenerator:
    """
    Generator backed by a JSON HTTP endpoint.

    POSTs ``{"prompt": ..., "response_schema": ...}`` and expects either a
    JSON array of keyframes or an object with a ``keyframes`` array.
    """

    def __init__(self, config: GeneratorConfig, session: requests.Session | None = None):
        """
        Initialize the generator.

        Args:
            config: Endpoint settings
            session: HTTP session (injectable for tests)
        """
        if not config.is_configured:
            raise GenerationError(
                "No generator endpoint configured.",
                technical_message="generator.url is not set",
                recovery_hint="Run 'growgrid config set generator.url <URL>'.",
            )
        self.config = config
        self._session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    def generate(self, request: GenerationRequest) -> list[dict[str, Any]]:
        payload = {"prompt": build_prompt(request), "response_schema": RESPONSE_SCHEMA}
        logger.info(f"Requesting keyframes from {self.config.url}")

        try:
            resp = self._session.post(
                self.config.url,
                json=payload,
                headers=self._headers(),
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Generator request failed: {e}")
            raise GenerationError(technical_message=f"Request to {self.config.url} failed: {e}") from e

        if resp.status_code >= 400:
            raise GenerationError(
                technical_message=f"HTTP {resp.status_code}: {resp.text[:300]}",
            )

        try:
            body = resp.json()
        except ValueError as e:
            raise GenerationError(
                technical_message=f"Response is not JSON: {resp.text[:300]}"
            ) from e

        if isinstance(body, dict):
            body = body.get("keyframes")
        if not isinstance(body, list):
            raise GenerationError(technical_message="Response is not a keyframe array")
        return body


class GeneratedKeyframe(BaseModel):
    """One validated keyframe candidate."""

    name: str = ""
    time: float
    grid: list[Cell]


_CANDIDATES = TypeAdapter(list[GeneratedKeyframe])


def validate_candidates(candidates: Any, grid_size: int) -> list[Keyframe]:
    """
    Turn raw candidates into keyframes sorted by time.

    Grids are resized to ``grid_size`` and colours clamped into 0-255.

    Raises:
        GenerationError: If the candidates are malformed or empty
    """
    try:
        parsed = _CANDIDATES.validate_python(candidates)
    except ValidationError as e:
        raise GenerationError(technical_message=f"Malformed keyframes: {e}") from e

    if not parsed:
        raise GenerationError(technical_message="Generator returned no keyframes")

    keyframes = []
    for candidate in parsed:
        if len(candidate.grid) != grid_size * grid_size:
            logger.debug(
                f"Resizing generated grid '{candidate.name}' "
                f"from {len(candidate.grid)} to {grid_size * grid_size} cells"
            )
        keyframes.append(
            Keyframe(
                name=candidate.name,
                time=candidate.time,
                grid=resize_grid(candidate.grid, grid_size),
            )
        )
    keyframes.sort(key=lambda kf: kf.time)
    return keyframes


class GeneratorService:
    """
    Runs one generation request at a time against a KeyframeStore.

    A second request while one is in flight is rejected rather than queued.
    """

    def __init__(self, generator: KeyframeGenerator):
        self.generator = generator
        self._lock = threading.Lock()

    @property
    def is_generating(self) -> bool:
        return self._lock.locked()

    def generate_into(self, store, day: int, request: GenerationRequest) -> int:
        """
        Generate keyframes and replace one day of the store with them.

        Args:
            store: KeyframeStore to edit
            day: Day index to replace
            request: What to generate (grid_size is taken from the store)

        Returns:
            The first keyframe's time (for snapping the cursor)

        Raises:
            GenerationError: On any failure; the day is left untouched
        """
        if store.get_day(day) is None:
            raise GenerationError(technical_message=f"Day {day} does not exist")

        if not self._lock.acquire(blocking=False):
            raise GenerationError(
                "A pattern is already being generated.",
                recovery_hint="Wait for the current request to finish.",
            )

        try:
            request = request.model_copy(update={"grid_size": store.grid_size})
            candidates = self.generator.generate(request)
            keyframes = validate_candidates(candidates, store.grid_size)

            replaced = store.replace_day(day, keyframes)
            if not replaced:
                raise GenerationError(technical_message=f"Could not replace day {day}")

            logger.info(f"Generated {len(replaced)} keyframe(s) into day {day}")
            return replaced[0].time

        except GenerationError:
            logger.error(f"Generation for day {day} failed")
            raise

        except Exception as e:
            logger.error(f"Unexpected error during generation: {e}", exc_info=True)
            raise GenerationError(technical_message=str(e)) from e

        finally:
            self._lock.release()
