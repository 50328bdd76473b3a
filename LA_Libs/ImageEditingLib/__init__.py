"""
ImageEditingLib - Core image editing functionality

This module provides adjustment parameters, histogram sampling, filter
pipeline compilation, presets and raster rendering for Lunar Atelier.
"""

from LA_Libs.ImageEditingLib.image_models import (
    AdjustmentParameters,
    Histogram,
    ImageRecord,
    RgbaColor,
)
from LA_Libs.ImageEditingLib.histogram_sampler import (
    compute_sampling_size,
    downscale_for_sampling,
    bin_channels,
    sample_histogram,
    sample_histogram_from_buffer,
    sample_histogram_from_source,
)
from LA_Libs.ImageEditingLib.adjustment_pipeline import (
    PipelineOperation,
    CompiledPipeline,
    compile_adjustments,
    compile_preview_filter,
    compile_export_filter,
)
from LA_Libs.ImageEditingLib.presets import (
    PRESETS,
    list_presets,
    get_preset,
    apply_preset,
    reset_adjustments,
)
from LA_Libs.ImageEditingLib.raster_filters import (
    apply_pipeline,
    render_adjusted,
)
from LA_Libs.ImageEditingLib.image_editing_ops import (
    export_image,
    save_images,
)
from LA_Libs.ImageEditingLib.editor_session import EditorSession

__all__ = [
    "AdjustmentParameters",
    "Histogram",
    "ImageRecord",
    "RgbaColor",
    "compute_sampling_size",
    "downscale_for_sampling",
    "bin_channels",
    "sample_histogram",
    "sample_histogram_from_buffer",
    "sample_histogram_from_source",
    "PipelineOperation",
    "CompiledPipeline",
    "compile_adjustments",
    "compile_preview_filter",
    "compile_export_filter",
    "PRESETS",
    "list_presets",
    "get_preset",
    "apply_preset",
    "reset_adjustments",
    "apply_pipeline",
    "render_adjusted",
    "export_image",
    "save_images",
    "EditorSession",
]
