"""
Editing session state for Lunar Atelier.

An :class:`EditorSession` holds the image being edited, its histogram and
the current adjustment parameters. Derived values are recomputed from
scratch whenever their inputs change: a new image yields a new histogram,
and every filter request compiles the current parameters afresh.
"""

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, Union

from LA_Libs.constants import SESSION_EDIT_LABEL
from LA_Libs.ImageEditingLib.adjustment_pipeline import CompiledPipeline, compile_adjustments
from LA_Libs.ImageEditingLib.histogram_sampler import sample_histogram
from LA_Libs.ImageEditingLib.image_editing_ops import export_image
from LA_Libs.ImageEditingLib.image_models import AdjustmentParameters, Histogram
from LA_Libs.ImageEditingLib.presets import apply_preset, reset_adjustments
from LA_Libs.ImageSourceLib.image_loader import ImageSource, encode_data_url, load_image

if TYPE_CHECKING:
    from LA_Libs.EditStoreLib.edit_store import EditStore

logger = logging.getLogger(__name__)


class EditorSession:
    """State of a single editing session.

    Attributes:
        image: The decoded RGBA image, or None
        image_ref: Reference persisted with saved edits (path, URL or data URL)
        parameters: Current adjustment parameters
        histogram: Histogram of ``image``, or None when no image is loaded
    """

    def __init__(self, parameters: Optional[AdjustmentParameters] = None):
        self.image: Optional[Any] = None
        self.image_ref: Optional[str] = None
        self.parameters = parameters or AdjustmentParameters.neutral()
        self.histogram: Optional[Histogram] = None

    @property
    def has_image(self) -> bool:
        return self.image is not None

    def _require_image(self) -> Any:
        if self.image is None:
            raise ValueError("No image loaded")
        return self.image

    # Image lifecycle

    def load_image(self, source: ImageSource) -> Histogram:
        """
        Replace the session image.

        The image and histogram are swapped in together only after both were
        computed; on failure the previous image stays in place.

        Raises:
            ImageLoadError: If the source cannot be decoded
            InvalidImageError: If the decoded image has no pixels
        """
        image = load_image(source)
        histogram = sample_histogram(image)

        if isinstance(source, (bytes, bytearray)):
            image_ref = encode_data_url(image)
        else:
            image_ref = str(source)

        self.image = image
        self.image_ref = image_ref
        self.histogram = histogram
        logger.debug(f"Loaded {image.size[0]}x{image.size[1]} image into session")
        return histogram

    def clear_image(self) -> None:
        self.image = None
        self.image_ref = None
        self.histogram = None

    # Parameters

    def set_parameters(self, parameters: AdjustmentParameters) -> None:
        self.parameters = parameters

    def update(self, **changes: Any) -> AdjustmentParameters:
        """Change some sliders; values are clamped into their domains."""
        values = {
            "brightness": self.parameters.brightness,
            "contrast": self.parameters.contrast,
            "saturation": self.parameters.saturation,
            "blur_radius": self.parameters.blur_radius,
            "hue_rotation": self.parameters.hue_rotation,
            "temperature": self.parameters.temperature,
        }
        values.update(changes)
        self.parameters = AdjustmentParameters.clamped(**values)
        return self.parameters

    def apply_preset(self, name: str) -> AdjustmentParameters:
        self.parameters = apply_preset(name, self.parameters)
        return self.parameters

    def reset(self) -> AdjustmentParameters:
        self.parameters = reset_adjustments()
        return self.parameters

    # Derived output

    def pipeline(self) -> CompiledPipeline:
        return compile_adjustments(self.parameters)

    def preview_filter(self) -> str:
        return self.pipeline().to_preview_string()

    def export_filter(self) -> str:
        return self.pipeline().to_export_string()

    def export(self, output_path: Union[str, Path], save_format: Optional[str] = None) -> Path:
        """
        Render the current parameters onto the full-resolution image and save it.

        Raises:
            ValueError: If no image is loaded
        """
        return export_image(self._require_image(), self.parameters, output_path, save_format)

    def save(
        self,
        store: "EditStore",
        label: str = SESSION_EDIT_LABEL,
        album_id: Optional[str] = None,
    ) -> str:
        """
        Persist the current parameters with the image reference.

        Returns:
            The new edit id

        Raises:
            ValueError: If no image is loaded
        """
        self._require_image()
        return store.save_edit(self.parameters, label, self.image_ref, album_id=album_id)
