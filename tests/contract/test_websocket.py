from fastapi.testclient import TestClient

from app.container import build_container
from app.main import create_app
from tests.helpers import ACME_USER, ADMIN, CPR_A, INSTRUCTOR, TODAY, headers, seed_reference_data


def test_push_socket_delivers_course_frames(settings):
    container = build_container(settings, clock=lambda: TODAY)
    app = create_app(container)

    with TestClient(app) as client:
        client.portal.call(seed_reference_data, container.database)

        with client.websocket_connect("/ws") as ws:
            ws.send_json({"type": "identify", "userId": INSTRUCTOR.user_id})
            assert ws.receive_json() == {"type": "identified", "userId": INSTRUCTOR.user_id}

            created = client.post(
                "/courses",
                json={"course_type_id": CPR_A, "location": "Main Hall", "students_registered": 8},
                headers=headers(ACME_USER),
            )
            course_id = created.json()["data"]["id"]
            requested = ws.receive_json()
            assert requested["event"] == "course_status_changed"
            assert requested["data"]["status"] == "pending"

            client.post(
                f"/courses/{course_id}/schedule",
                json={"instructor_id": INSTRUCTOR.user_id, "date_scheduled": "2026-03-09"},
                headers=headers(ADMIN),
            )
            assigned = ws.receive_json()
            changed = ws.receive_json()
            assert assigned["event"] == "course_assigned"
            assert assigned["data"]["courseId"] == course_id
            assert changed["event"] == "course_status_changed"
            assert changed["data"]["status"] == "scheduled"

        assert len(container.broadcaster.registry) == 0


def test_bad_identify_gets_an_error_frame(settings):
    app = create_app(build_container(settings, clock=lambda: TODAY))

    with TestClient(app) as client, client.websocket_connect("/ws") as ws:
        ws.send_json({"type": "identify", "userId": "not-a-number"})
        assert ws.receive_json()["type"] == "error"
        ws.send_json({"type": "identify", "userId": 7})
        assert ws.receive_json() == {"type": "identified", "userId": 7}
