"""Selftest for the pure-Python raster surface."""

from runtime.surface_v1 import RasterSurfaceV1, overlay_hex, parse_color


def test_parse_color_forms():
    assert parse_color("#4422FF") == (0x44, 0x22, 0xFF, 255)
    assert parse_color("#00000080") == (0, 0, 0, 128)
    assert parse_color((1, 2, 3)) == (1, 2, 3, 255)
    assert parse_color((1, 2, 3, 4)) == (1, 2, 3, 4)
    for bad in ("#12345", "blue", "#GGGGGG", (1, 2)):
        try:
            parse_color(bad)
            assert False, f"accepted {bad!r}"
        except ValueError:
            pass


def test_overlay_hex():
    assert overlay_hex(1) == "#00000001"
    assert overlay_hex(128.9) == "#00000080"
    assert overlay_hex(300) == "#000000ff"
    assert overlay_hex(-4) == "#00000000"


def test_get_pixel_and_bounds():
    s = RasterSurfaceV1(8, 6, "#102030")
    assert s.get_pixel(0, 0) == (0x10, 0x20, 0x30, 255)
    assert s.get_pixel(7.9, 5.9) == (0x10, 0x20, 0x30, 255)
    assert s.get_pixel(-1, 0) == (0, 0, 0, 0)
    assert s.get_pixel(8, 0) == (0, 0, 0, 0)
    assert s.get_pixel(0, 6) == (0, 0, 0, 0)


def test_overlay_blend_matches_source_over():
    s = RasterSurfaceV1(10, 10, "#4422FF")
    s.fill_color("#00000080")
    s.draw_rect(0, 0, 10, 10)
    assert s.get_pixel(5, 5) == (34, 17, 127, 255)

    # partial rect goes through the per-pixel path and must agree
    p = RasterSurfaceV1(10, 10, "#4422FF")
    p.fill_color("#00000080")
    p.draw_rect(2, 2, 3, 3)
    assert p.get_pixel(3, 3) == (34, 17, 127, 255)
    assert p.get_pixel(6, 6) == (0x44, 0x22, 0xFF, 255)


def test_repeated_overlays_stall_just_above_black():
    s = RasterSurfaceV1(4, 4, "#FFFFFF")
    s.fill_color(overlay_hex(64))
    prev = 255
    for _ in range(40):
        s.draw_rect(0, 0, 4, 4)
        r = s.get_pixel(0, 0)[0]
        assert r <= prev
        prev = r
    # rounding leaves a floor: 1 * 191/255 still rounds back to 1
    assert prev == 1


def test_decay_transform():
    s = RasterSurfaceV1(2, 1, "#FFFFFF")
    s.apply_decay(0.5)
    assert s.get_pixel(0, 0) == (127, 127, 127, 255)

    b = RasterSurfaceV1(2, 1, (100, 200, 0))
    b.apply_decay(-0.5)
    assert b.get_pixel(1, 0) == (150, 255, 0, 255)

    z = RasterSurfaceV1(2, 1, (100, 200, 0))
    z.apply_decay(0.0)
    assert z.get_pixel(0, 0) == (100, 200, 0, 255)


def test_circle_covers_centre_only():
    s = RasterSurfaceV1(40, 40)
    s.fill_color("#4422FF")
    s.draw_circle(20, 20, 10)
    assert s.get_pixel(20, 20) == (0x44, 0x22, 0xFF, 255)
    assert s.get_pixel(24, 20)[:3] == (0x44, 0x22, 0xFF)
    assert s.get_pixel(27, 20) == (0, 0, 0, 255)
    assert s.get_pixel(24, 24) == (0, 0, 0, 255)

    # sub-pixel dots still land somewhere
    s.fill_color("#FFFFFF")
    s.draw_circle(3.2, 4.7, 0.5)
    assert s.get_pixel(3, 4) == (255, 255, 255, 255)


def test_text_stays_inside_its_bounds():
    s = RasterSurfaceV1(120, 80)
    assert s.has_font()
    w, h = s.text_bounds("ab", 70)
    assert (w, h) == (77.0, 49.0)
    x, base = 10.0, 60.0
    s.fill_color("#FFFFFF")
    s.draw_text("ab", x, base, 70)

    lit_inside = 0
    for py in range(80):
        for px in range(120):
            lit = s.get_pixel(px, py)[0] > 0
            inside = x <= px < x + w and base - h <= py < base
            if lit:
                assert inside, (px, py)
                lit_inside += 1
    assert lit_inside > 0


def test_blur_spreads_a_point():
    s = RasterSurfaceV1(9, 9)
    s.fill_color("#FFFFFF")
    s.draw_rect(4, 4, 1, 1)
    s.apply_blur(1)
    c = s.get_pixel(4, 4)[0]
    assert 0 < c < 255
    assert s.get_pixel(5, 5)[0] > 0
    assert s.get_pixel(7, 7)[0] == 0
    s.apply_blur(0)
    assert s.get_pixel(4, 4)[0] == c


def test_composite_and_release():
    a = RasterSurfaceV1(6, 4, "#123456")
    b = RasterSurfaceV1(6, 4)
    a.composite_onto(b)
    assert b.to_bytes() == a.to_bytes()
    assert len(a.to_bytes()) == 6 * 4 * 3
    try:
        a.composite_onto(object())  # type: ignore[arg-type]
        assert False, "composited onto a non-surface"
    except TypeError:
        pass
    a.release()
    assert a.released and a.to_bytes() == b""


def main():
    test_parse_color_forms()
    test_overlay_hex()
    test_get_pixel_and_bounds()
    test_overlay_blend_matches_source_over()
    test_repeated_overlays_stall_just_above_black()
    test_decay_transform()
    test_circle_covers_centre_only()
    test_text_stays_inside_its_bounds()
    test_blur_spreads_a_point()
    test_composite_and_release()
    print("OK: test_raster_surface")


if __name__ == "__main__":
    main()
