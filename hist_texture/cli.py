"""
CLI entry point for histogram texture statistics.

Orchestrates the pipeline: image / mask loading → ROI histogram →
texture statistics → results table → report generation.

Usage::

    hist-texture --image slice.nii.gz --output-dir ./texture_output
    hist-texture --image img.npy --roi 10 10 64 64 --mask roi_mask.npy
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence, Tuple

from .buffer import SUPPORTED_BIT_DEPTHS
from .metrics.texture import TextureStatistics


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="hist-texture",
        description="Histogram statistics for texture analysis",
    )
    p.add_argument(
        "--image", "-i",
        required=True,
        help="Path to an 8/16-bit image (.nii, .nii.gz or .npy).",
    )
    p.add_argument(
        "--mask", "-m",
        default=None,
        help="Path to a binary ROI mask. Must match the --roi size, or the "
             "whole image when no --roi is given.",
    )
    p.add_argument(
        "--roi",
        nargs=4,
        type=int,
        default=None,
        metavar=("X", "Y", "WIDTH", "HEIGHT"),
        help="Bounding rectangle of the region (clipped to the image).",
    )
    p.add_argument(
        "--label",
        default=None,
        help="Row label for the results (default: image file name).",
    )
    p.add_argument(
        "--bit-depth",
        type=int,
        choices=SUPPORTED_BIT_DEPTHS,
        default=None,
        help="Image bit depth (default: inferred from the data).",
    )
    p.add_argument(
        "--slice",
        type=int,
        default=None,
        dest="slice_index",
        help="Slice of a 3-D volume to analyse (default: middle slice).",
    )
    p.add_argument(
        "--output-dir", "-o",
        default="./texture_output",
        help="Directory for reports (default: ./texture_output).",
    )
    p.add_argument(
        "--config", "-c",
        default=None,
        help="Path to custom YAML configuration file.",
    )
    p.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output.",
    )
    return p


def _log(msg: str, verbose: bool = True) -> None:
    if verbose:
        print(f"[hist-texture] {msg}", flush=True)


def _image_label(path: Path) -> str:
    name = path.name
    for suffix in (".nii.gz", ".nii", ".npy"):
        if name.lower().endswith(suffix):
            return name[: -len(suffix)]
    return name


def run_pipeline(
    image_path: str,
    output_dir: str,
    config_path: Optional[str] = None,
    mask_path: Optional[str] = None,
    roi: Optional[Sequence[int]] = None,
    label: Optional[str] = None,
    bit_depth: Optional[int] = None,
    slice_index: Optional[int] = None,
    verbose: bool = False,
) -> TextureStatistics:
    """Compute histogram texture statistics for one image region.

    Parameters
    ----------
    image_path : str
        Image file (NIfTI or ``.npy``).
    output_dir : str
        Output directory for reports.
    config_path : str, optional
        Custom YAML config.
    mask_path : str, optional
        Binary ROI mask file.
    roi : sequence of 4 int, optional
        ``(x, y, width, height)`` bounding rectangle.
    label : str, optional
        Row label (defaults to the image file name).
    bit_depth, slice_index : int, optional
        Override the configured bit depth / volume slice.
    verbose : bool
        Print progress messages (also enabled by ``verbose: true`` in the
        config).

    Returns
    -------
    TextureStatistics

    Raises
    ------
    FileNotFoundError
        If the image (or mask) does not exist.
    """
    from .buffer import RegionDescriptor
    from .config import load_config
    from .io_utils import load_buffer, load_mask
    from .metrics.histogram import count_included
    from .metrics.texture import compute_texture_statistics
    from .reporting.json_report import generate_json_report
    from .results import ResultsTable

    # ---- Setup ----
    cfg = load_config(config_path)
    verbose = verbose or cfg.verbose
    img = Path(image_path)
    if not img.is_file():
        raise FileNotFoundError(f"There is no image: {img}")
    if mask_path is not None and not Path(mask_path).is_file():
        raise FileNotFoundError(f"Mask not found: {mask_path}")

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    if label is None:
        label = _image_label(img)
    if bit_depth is None:
        bit_depth = cfg.histogram.bit_depth
    if slice_index is None:
        slice_index = cfg.histogram.slice_index

    _log(f"Histogram texture statistics v{cfg.version}", verbose)
    _log(f"Input:  {img}", verbose)
    _log(f"Output: {out}", verbose)

    input_files = {"image": str(img)}

    # ---- Load image and region ----
    buffer = load_buffer(img, bit_depth=bit_depth, slice_index=slice_index)
    _log(f"Loaded image: {buffer!r}", verbose)

    mask = None
    if mask_path:
        mask = load_mask(mask_path, slice_index=slice_index)
        input_files["mask"] = mask_path

    rect: Optional[Tuple[int, int, int, int]] = tuple(roi) if roi is not None else None
    region = RegionDescriptor(rect=rect, mask=mask)
    _log(f"Region: {rect or 'entire image'}"
         f"{' (masked)' if mask is not None else ''}, "
         f"{count_included(buffer, region)} samples", verbose)

    # ---- Compute statistics ----
    stats = compute_texture_statistics(
        buffer,
        region,
        label=label,
        zero_variance=cfg.statistics.zero_variance,
        empty_region=cfg.statistics.empty_region,
    )
    table = ResultsTable()
    table.add(stats)

    for name, value in stats.as_row().items():
        _log(f"  {name:<20s} = {value:.6g}", verbose)
    for warning in stats.warnings:
        _log(f"WARNING: {warning}", True)

    # ---- Reports ----
    if cfg.reporting.json:
        json_path = generate_json_report(
            records=table,
            input_files=input_files,
            config_path=config_path,
            output_path=out / f"{label}_texture.json",
        )
        _log(f"JSON report: {json_path}", verbose)

    if cfg.reporting.csv:
        csv_path = table.to_csv(out / f"{label}_texture.csv")
        _log(f"CSV table: {csv_path}", verbose)

    _log("Pipeline complete.", verbose)
    return stats


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    try:
        run_pipeline(
            image_path=args.image,
            output_dir=args.output_dir,
            config_path=args.config,
            mask_path=args.mask,
            roi=args.roi,
            label=args.label,
            bit_depth=args.bit_depth,
            slice_index=args.slice_index,
            verbose=args.verbose,
        )
    except Exception as exc:
        print(f"[hist-texture] ERROR: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
