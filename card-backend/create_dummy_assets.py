# card-backend/create_dummy_assets.py
import os
import sys

import numpy as np
from PIL import Image

HERE = os.path.dirname(os.path.abspath(__file__))
DEFAULT_ROOT = os.path.join(HERE, "public")


def _gradient(width, height, start, end, rng):
    # vertical blend from start to end colour with a little noise on top
    t = np.linspace(0.0, 1.0, height).reshape(height, 1, 1)
    start = np.array(start, dtype=np.float32).reshape(1, 1, 3)
    end = np.array(end, dtype=np.float32).reshape(1, 1, 3)
    pixels = start + (end - start) * t
    pixels = np.broadcast_to(pixels, (height, width, 3)).copy()
    pixels += rng.normal(0, 6, size=pixels.shape)
    return Image.fromarray(np.clip(pixels, 0, 255).astype(np.uint8))


def _logo(size=240):
    # filled disc with a ring, transparent outside
    yy, xx = np.mgrid[0:size, 0:size]
    r = np.hypot(xx - size / 2, yy - size / 2)
    rgba = np.zeros((size, size, 4), dtype=np.uint8)
    disc = r <= size * 0.45
    ring = (r > size * 0.36) & disc
    rgba[disc] = (230, 180, 40, 255)
    rgba[ring] = (255, 255, 255, 255)
    return Image.fromarray(rgba)


def create_all_assets(root=DEFAULT_ROOT, count=3, size=(1080, 1350), seed=None):
    rng = np.random.default_rng(seed)
    palettes = {
        "ai": [((20, 30, 80), (120, 40, 160)), ((10, 60, 70), (30, 160, 140)), ((60, 10, 40), (200, 80, 60))],
        "others": [((40, 40, 40), (110, 110, 120)), ((20, 50, 20), (90, 150, 70)), ((70, 50, 20), (180, 140, 90))],
    }
    written = []
    for folder, colours in palettes.items():
        out_dir = os.path.join(root, folder)
        os.makedirs(out_dir, exist_ok=True)
        for i in range(count):
            start, end = colours[i % len(colours)]
            img = _gradient(size[0], size[1], start, end, rng)
            # alternate formats so both decoders get exercised
            ext = "png" if i % 2 == 0 else "jpg"
            path = os.path.join(out_dir, f"bg{i + 1}.{ext}")
            if ext == "jpg":
                img.save(path, quality=90)
            else:
                img.save(path)
            written.append(path)

    logo_dir = os.path.join(root, "bg")
    os.makedirs(logo_dir, exist_ok=True)
    logo_path = os.path.join(logo_dir, "logo.png")
    _logo().save(logo_path)
    written.append(logo_path)
    return written


if __name__ == "__main__":
    output_root = sys.argv[1] if len(sys.argv) > 1 else os.getenv("CARD_ASSET_ROOT", DEFAULT_ROOT)
    files = create_all_assets(output_root)
    print("Asset creation script finished successfully:", output_root, f"({len(files)} files)")
