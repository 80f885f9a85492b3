from class_attendance.sessions.qr import render_qr_png


def test_render_qr_png_is_png():
    png = render_qr_png("http://testserver/attendance/3A/abc")
    assert png[:8] == b"\x89PNG\r\n\x1a\n"


def test_session_qr_png(container, fixed_now):
    session_id = container.session_service.create_session(1, now=fixed_now).session.session_id
    assert container.session_service.qr_png(session_id).startswith(b"\x89PNG")
