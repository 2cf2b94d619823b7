#!/usr/bin/env python3
"""
Demo script for floatmap
Creates float map images and demonstrates decoding, tone mapping and comparison
"""

import numpy as np

from floatmap import FloatMapConfig, FloatMapImage, FloatMapProcessor, write
from floatmap.sinks import DictMetricSink, PILRasterSink


def create_test_images():
    """Create test float maps for demonstration"""
    print("Creating test images...")
    width, height = 400, 300

    # Image 1: horizontal HDR gradient, blue brighter than red
    ramp = np.linspace(0.0, 4.0, width, dtype=np.float32)
    rgb = np.zeros((height, width, 3), dtype=np.float32)
    rgb[..., 0] = ramp * 0.25
    rgb[..., 1] = ramp * 0.5
    rgb[..., 2] = ramp
    original = FloatMapImage(width, height, rgb)
    write(original, 'test_original.pfm')
    print("✓ Created test_original.pfm")

    # Image 3: gray version of image 1
    gray = rgb.mean(axis=2)
    write(FloatMapImage(width, height, gray), 'test_gray.pfm')
    print("✓ Created test_gray.pfm (gray scale)")

    # Image 2: same image with a small patch changed
    rgb[10:20, 10:20] = (1.0, 1.0, 0.0)
    write(FloatMapImage(width, height, rgb), 'test_modified.pfm')
    print("✓ Created test_modified.pfm (slightly modified)")

    return ['test_original.pfm', 'test_modified.pfm', 'test_gray.pfm']


def run_demo():
    """Run the floatmap demonstration"""
    print("=" * 60)
    print("floatmap - Demo")
    print("=" * 60)

    paths = create_test_images()
    processor = FloatMapProcessor(FloatMapConfig(gamma=2.2))
    original, modified, gray = [processor.load(p) for p in paths]

    print("\n" + "=" * 60)
    print("Step 1: Tone mapping the original image")
    print("=" * 60)

    direct = PILRasterSink()
    processor.render(original, direct)
    scaled = PILRasterSink()
    FloatMapProcessor(FloatMapConfig(gamma=1.0, normalized=True)).render(original, scaled)
    print(f"  - Direct raster: {direct.image.size} {direct.image.mode}")
    print(f"  - Normalized raster: {scaled.image.size} {scaled.image.mode}")

    print("\n" + "=" * 60)
    print("Step 2: Comparing images")
    print("=" * 60)

    for name, other in [('original', original), ('modified', modified), ('gray', gray)]:
        sink = DictMetricSink()
        report = processor.compare(original, other, sink)
        print(f"\n  original vs {name}:")
        print(f"  - MSE: {report['mse']:.6g}")
        print(f"  - PSNR: {report['psnr']:.2f} dB")
        print(f"  - Status: {'✓ IDENTICAL' if report['identical'] else '✗ DIFFERENT'}")

    print("\n" + "=" * 60)
    print("Step 3: Difference image")
    print("=" * 60)

    diff = processor.difference(original, modified)
    write(diff, 'diff.pfm')
    print(f"  - Written diff.pfm ({diff!r})")

    print("\n" + "=" * 60)
    print("Demo Complete!")
    print("=" * 60)


if __name__ == '__main__':
    run_demo()
