"""End-to-end WebSocket tests: HTTP mutations reach the right rooms."""

from tests.conftest import make_order_payload


def join(ws, user_type, user_id=None):
    ws.send_json({"event": "joinRoom", "data": {"userType": user_type, "userId": user_id}})
    connected = ws.receive_json()
    stats = ws.receive_json()
    assert connected["event"] == "connected"
    assert stats["event"] == "connectionStats"
    return connected["data"], stats["data"]


def test_join_acknowledgement(client):
    with client.websocket_connect("/ws") as ws:
        ack, stats = join(ws, "customer", "u-1")

    assert ack["roomName"] == "customer_room"
    assert ack["message"].endswith("customer app!")
    assert stats["customers"] == 1
    assert stats["total"] == 1


def test_unknown_event_keeps_connection_open(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_text("not json at all")
        assert ws.receive_json()["event"] == "error"

        ws.send_json({"event": "launchRockets", "data": {}})
        assert ws.receive_json() == {
            "event": "error",
            "data": {"message": "Unknown event: launchRockets"},
        }

        ws.send_json({"event": "test", "data": "still here"})
        assert ws.receive_json()["data"]["originalData"] == "still here"


def test_binary_frames_keep_connection_open(client):
    with client.websocket_connect("/ws") as ws:
        ws.send_bytes(b"\xff\xfe")
        error = ws.receive_json()
        assert error["event"] == "error"
        assert "UTF-8" in error["data"]["message"]

        ws.send_bytes(b'{"event": "test", "data": 1}')
        assert ws.receive_json()["data"]["originalData"] == 1

        ws.send_json({"event": "test", "data": "after"})
        assert ws.receive_json()["event"] == "testResponse"


def test_order_lifecycle_is_routed_by_room(client):
    with client.websocket_connect("/ws") as customer:
        join(customer, "customer", "u-1")

        with client.websocket_connect("/ws") as restaurant:
            _, stats = join(restaurant, "restaurant", "staff-1")
            assert (stats["customers"], stats["restaurants"], stats["total"]) == (1, 1, 2)
            assert customer.receive_json()["data"] == stats

            order = client.post("/api/orders", json=make_order_payload()).json()["data"]

            new_order = restaurant.receive_json()
            assert new_order["event"] == "newOrder"
            assert new_order["data"]["id"] == order["id"]
            assert restaurant.receive_json()["event"] == "orderCreated"

            confirmed = customer.receive_json()
            assert confirmed == {
                "event": "orderConfirmed",
                "data": {"orderId": order["id"], "estimatedTime": 30, "orderNumber": 1},
            }
            assert customer.receive_json()["event"] == "orderCreated"

            client.put(f"/api/orders/{order['id']}/status", json={"status": "preparing"})

            update = customer.receive_json()
            assert update["event"] == "orderStatusUpdate"
            assert update["data"]["status"] == "preparing"
            assert customer.receive_json()["event"] == "orderStatusChanged"
            # staff only see the instrumentation notice
            assert restaurant.receive_json()["event"] == "orderStatusChanged"

            restaurant.send_json({"event": "trackOrder", "data": order["id"]})
            tracking = restaurant.receive_json()
            assert tracking["event"] == "orderTrackingUpdate"
            assert tracking["data"]["status"] == "preparing"

        after = customer.receive_json()
        assert after["event"] == "connectionStats"
        assert (after["data"]["customers"], after["data"]["restaurants"]) == (1, 0)


def test_menu_changes_reach_everyone(client):
    with client.websocket_connect("/ws") as customer:
        join(customer, "customer")

        client.delete("/api/menu/1")

        menu = customer.receive_json()
        assert menu["event"] == "menuUpdated"
        assert [item["id"] for item in menu["data"]] == [2, 3, 4, 5]


def test_staff_toggle_availability(client):
    with client.websocket_connect("/ws") as restaurant:
        join(restaurant, "restaurant")

        restaurant.send_json({
            "event": "toggleItemAvailability",
            "data": {"itemId": 3, "available": False},
        })
        menu = restaurant.receive_json()

    assert menu["event"] == "menuUpdated"
    assert menu["data"][2]["available"] is False
    assert client.get("/api/menu").json()["data"][2]["available"] is False
