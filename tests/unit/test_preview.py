import sys
import unittest
from pathlib import Path

try:
    from PIL import Image
except Exception:  # pragma: no cover
    Image = None

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "packages" / "renderer"))
sys.path.insert(0, str(ROOT / "packages" / "format"))

from golfile_format.models import RGBA, Settings


class PreviewTests(unittest.TestCase):
    def setUp(self):
        if Image is None:
            self.skipTest("Pillow not installed")

    def test_preview_geometry_and_colors(self):
        from golfile_renderer.preview import render_preview

        settings = Settings()
        settings.resize(3, 2)
        settings.set_square(1, 2, True)
        settings.set_background_color(RGBA(1, 2, 3, 255))
        settings.set_square_color_off(RGBA(10, 10, 10, 255))
        settings.set_square_color_on(RGBA(200, 0, 0, 255))

        img = render_preview(settings, cell_px=4, gap_px=1)
        self.assertEqual(img.size, (3 * 5 + 1, 2 * 5 + 1))
        self.assertEqual(img.mode, "RGBA")
        self.assertEqual(img.getpixel((0, 0)), (1, 2, 3, 255))
        self.assertEqual(img.getpixel((1, 1)), (10, 10, 10, 255))
        # Last square of the second row.
        self.assertEqual(img.getpixel((2 * 5 + 1, 5 + 1)), (200, 0, 0, 255))
        self.assertEqual(img.getpixel((2 * 5 + 4, 5 + 4)), (200, 0, 0, 255))

    def test_invalid_cell_size(self):
        from golfile_renderer.preview import render_preview

        with self.assertRaises(ValueError):
            render_preview(Settings(), cell_px=0)

    def test_squares_from_image(self):
        from golfile_renderer.preview import squares_from_image

        img = Image.new("L", (4, 2), 0)
        img.putpixel((3, 1), 255)
        squares = squares_from_image(img)
        self.assertEqual(squares.shape, (2, 4))
        self.assertEqual(int(squares.sum()), 1)
        self.assertTrue(squares[1, 3])

    def test_apply_image_resizes_board(self):
        from golfile_renderer.preview import apply_image

        img = Image.new("RGB", (20, 10), (255, 255, 255))
        settings = Settings()
        apply_image(settings, img, columns=10, rows=5)
        self.assertEqual((settings.squares_x, settings.squares_y), (10, 5))
        self.assertEqual(settings.live_count(), 50)


if __name__ == "__main__":
    unittest.main()
