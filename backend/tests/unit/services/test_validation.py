"""
Unit Tests for image checks and the price per sqft derivation
"""
import base64

import pytest

from plotdesk.core.constants import IMAGE_MAX_SIZE, Messages
from plotdesk.services.validation import ImageUpload, encode_image, price_per_sqft, validate_image


class TestPricePerSqft:

    def test_whole_number_division(self):
        assert price_per_sqft(2400000, '2400 sqft') == 1000

    @pytest.mark.parametrize('price,size,expected', [
        (1000, '3', 333),
        (1000, '6', 167),     # 166.67 rounds up
        (5, '2', 3),          # 2.5 rounds half up
        (5000000, '40x60 ft', 125000),  # only the first digit run counts
        (150000, 'about 1200 sq yards', 125),
    ])
    def test_first_digit_run_rounded_half_up(self, price, size, expected):
        assert price_per_sqft(price, size) == expected

    @pytest.mark.parametrize('price,size', [
        (None, '2400'),
        (0, '2400'),
        (2400000, 'two acres'),
        (2400000, ''),
        (2400000, '0 sqft'),
    ])
    def test_absent(self, price, size):
        assert price_per_sqft(price, size) is None


class TestImageValidation:

    def test_missing_image(self):
        assert validate_image(None) == [Messages.IMAGE_REQUIRED]

    def test_empty_file_is_missing(self):
        assert validate_image(ImageUpload(content=b'', content_type='image/png')) == [Messages.IMAGE_REQUIRED]

    def test_valid_image(self, png_image):
        assert validate_image(png_image) == []

    def test_wrong_type(self):
        upload = ImageUpload(content=b'%PDF-1.4', content_type='application/pdf', filename='brochure.pdf')
        assert validate_image(upload) == [Messages.INVALID_IMAGE]

    def test_too_large(self):
        upload = ImageUpload(content=b'\x00' * IMAGE_MAX_SIZE, content_type='image/jpeg')
        assert validate_image(upload) == [Messages.IMAGE_TOO_LARGE]

    def test_type_and_size_are_both_reported(self):
        upload = ImageUpload(content=b'\x00' * (IMAGE_MAX_SIZE + 1), content_type='text/plain')
        assert validate_image(upload) == [Messages.INVALID_IMAGE, Messages.IMAGE_TOO_LARGE]

    def test_encode_image_as_data_url(self, png_image):
        url = encode_image(png_image)

        prefix = 'data:image/png;base64,'
        assert url.startswith(prefix)
        assert base64.b64decode(url[len(prefix):]) == png_image.content
