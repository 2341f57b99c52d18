import json
import math

from tests.fakes import ADMIN_STEAM_ID, OTHER_STEAM_ID, PLAYER_STEAM_ID, fund, login
from zvcapi.games import chicken_cross

PLAYER = f"{PLAYER_STEAM_ID}@steam"


class TestAuthentication:
    """세션 인증 테스트"""

    def test_missing_session_is_401(self, client):
        response = client.get("/api/v1/zvc/balance")

        assert response.status_code == 401
        assert response.json() == {"error": "Not authenticated", "code": "AUTH_001"}

    def test_unknown_token_is_401(self, client):
        response = client.get("/api/v1/zvc/balance", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401

    def test_expired_session_is_removed(self, client, fake_redis):
        # Given
        headers = login(fake_redis, PLAYER_STEAM_ID, expires_in_ms=-1000)

        # When
        response = client.get("/api/v1/zvc/balance", headers=headers)

        # Then
        assert response.status_code == 401
        assert response.json()["error"] == "Session expired"
        assert f"session:token-{PLAYER_STEAM_ID}" not in fake_redis.store

    def test_session_cookie_is_accepted(self, client, fake_redis):
        login(fake_redis, PLAYER_STEAM_ID)
        client.cookies.set("session", f"token-{PLAYER_STEAM_ID}")

        response = client.get("/api/v1/zvc/balance")

        assert response.status_code == 200
        assert response.json() == {"playerId": PLAYER, "balance": 0}


class TestLedgerRoutes:
    """ZVC 잔액/원장 API 테스트"""

    def test_balance_ledger_integrity(self, client, db_session, fake_redis):
        headers = login(fake_redis, PLAYER_STEAM_ID)
        fund(db_session, PLAYER, 250)

        balance = client.get("/api/v1/zvc/balance", headers=headers).json()
        ledger = client.get("/api/v1/zvc/ledger?limit=10", headers=headers).json()
        integrity = client.get("/api/v1/zvc/integrity", headers=headers).json()

        assert balance["balance"] == 250
        assert ledger["totalCount"] == 1
        assert ledger["entries"][0]["balanceAfter"] == 250
        assert ledger["hasNext"] is False
        assert integrity["status"] == "OK"

    def test_ledger_limit_validation(self, client, fake_redis):
        headers = login(fake_redis, PLAYER_STEAM_ID)

        response = client.get("/api/v1/zvc/ledger?limit=0", headers=headers)

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_001"


class TestRouletteRoutes:
    """룰렛 API 테스트"""

    def test_red_bet_on_one(self, client, db_session, fake_redis, rng):
        """rng: 0 아님(0.5) -> 1 + 0 = 1 (red)"""
        # Given
        headers = login(fake_redis, PLAYER_STEAM_ID)
        fund(db_session, PLAYER, 100)
        rng.uniforms = [0.5]
        rng.ints = [0]

        # When
        response = client.post(
            "/api/v1/roulette", json={"bet": 100, "type": "red"}, headers=headers
        )

        # Then
        assert response.status_code == 200
        data = response.json()
        assert data["spinResult"] == 1
        assert data["color"] == "red"
        assert data["won"] is True
        assert data["payout"] == 200
        assert data["netChange"] == 100
        assert data["newBalance"] == 200

        stats = client.get("/api/v1/zvc/stats", headers=headers).json()
        assert stats["games"][0]["game"] == "roulette"
        assert stats["games"][0]["wins"] == 1

    def test_number_bet_requires_value(self, client, db_session, fake_redis):
        headers = login(fake_redis, PLAYER_STEAM_ID)
        fund(db_session, PLAYER, 100)

        response = client.post(
            "/api/v1/roulette", json={"bet": 10, "type": "number"}, headers=headers
        )

        assert response.status_code == 400
        assert client.get("/api/v1/zvc/balance", headers=headers).json()["balance"] == 100

    def test_bet_above_max(self, client, db_session, fake_redis):
        headers = login(fake_redis, PLAYER_STEAM_ID)
        fund(db_session, PLAYER, 10000)

        response = client.post(
            "/api/v1/roulette", json={"bet": 501, "type": "red"}, headers=headers
        )

        assert response.status_code == 400
        body = response.json()
        assert body["error"] == "Bet must be between 1 and 500"
        assert body["maxBet"] == 500

    def test_insufficient_balance(self, client, fake_redis):
        headers = login(fake_redis, PLAYER_STEAM_ID)

        response = client.post(
            "/api/v1/roulette", json={"bet": 10, "type": "red"}, headers=headers
        )

        assert response.status_code == 400
        body = response.json()
        assert body["code"] == "BALANCE_001"
        assert body["required"] == 10
        assert body["current"] == 0


class TestSingleShotGameRoutes:
    """슬롯 / 럭키 휠 API 테스트"""

    def test_slot_default_bet(self, client, db_session, fake_redis, rng):
        headers = login(fake_redis, PLAYER_STEAM_ID)
        fund(db_session, PLAYER, 100)
        rng.ints = [0]

        response = client.post("/api/v1/slotmachine", headers=headers)

        assert response.status_code == 200
        data = response.json()
        assert data["betAmount"] == 10
        assert data["tier"] == "TRIPLE"
        assert data["payout"] == 100
        assert data["newBalance"] == 190

    def test_lucky_wheel_spin(self, client, db_session, fake_redis, rng):
        headers = login(fake_redis, PLAYER_STEAM_ID)
        fund(db_session, PLAYER, 100)
        rng.uniforms = [0.99]

        response = client.post("/api/v1/luckywheel", json={"bet": 100}, headers=headers)

        assert response.status_code == 200
        data = response.json()
        assert data["multiplier"] == 4
        assert data["payout"] == 400
        assert data["won"] is True
        assert data["newBalance"] == 400

    def test_info_endpoints_are_public(self, client):
        slot = client.get("/api/v1/slotmachine/info").json()
        roulette_info = client.get("/api/v1/roulette/info").json()
        wheel = client.get("/api/v1/luckywheel/info").json()
        chicken = client.get("/api/v1/chickencross/info").json()
        coin = client.get("/api/v1/coinflip/info").json()

        assert slot["minBet"] == 10 and slot["maxBet"] == 500
        assert slot["jackpotSymbol"] == "🍒"
        assert roulette_info["betTypes"]["number"]["multiplier"] == 36
        assert roulette_info["zeroProbability"] == 0.1
        assert len(roulette_info["numbers"]) == 37
        assert [row["weight"] for row in wheel["payoutTable"]] == [1, 6, 5, 4, 2, 1]
        assert chicken == {"minBet": 10, "maxBet": 5000}
        assert coin["feePercent"] == 0


class TestChickenCrossRoutes:
    """치킨 크로스 API 테스트"""

    def test_full_flow(self, client, db_session, fake_redis, rng):
        # Given: seed = 1 + 0, MOVE 생존(0.0)
        headers = login(fake_redis, PLAYER_STEAM_ID)
        fund(db_session, PLAYER, 100)
        rng.uniforms = [0.0]
        rng.ints = [0]

        # When: 시작
        started = client.post(
            "/api/v1/chickencross", json={"intent": "MOVE", "bet": 50}, headers=headers
        )

        # Then
        assert started.status_code == 200
        assert started.json() == {"seed": 1, "state": "ACTIVE", "currentPayout": 50, "step": 0}
        active = client.get("/api/v1/chickencross/active", headers=headers).json()
        assert active == {"activeGameSeed": 1}

        # When: 전진
        moved = client.post(
            "/api/v1/chickencross", json={"intent": "MOVE", "seed": 1}, headers=headers
        ).json()

        # Then
        expected = math.floor(50 * chicken_cross.multiplier_for_step(1, 1))
        assert moved["step"] == 1
        assert moved["currentPayout"] == expected

        detail = client.get("/api/v1/chickencross?seed=1", headers=headers).json()
        assert detail["initialWager"] == 50
        assert detail["nextMultiplier"] == chicken_cross.multiplier_for_step(1, 2)

        # When: 캐시아웃
        cashed = client.post(
            "/api/v1/chickencross", json={"intent": "CASHOUT", "seed": 1}, headers=headers
        ).json()

        # Then
        assert cashed["state"] == "CASHED_OUT"
        balance = client.get("/api/v1/zvc/balance", headers=headers).json()["balance"]
        assert balance == 50 + expected
        assert client.get("/api/v1/chickencross/active", headers=headers).json() == {
            "activeGameSeed": None
        }

    def test_second_start_conflicts(self, client, db_session, fake_redis):
        headers = login(fake_redis, PLAYER_STEAM_ID)
        fund(db_session, PLAYER, 100)
        client.post("/api/v1/chickencross", json={"intent": "MOVE", "bet": 50}, headers=headers)

        response = client.post(
            "/api/v1/chickencross", json={"intent": "MOVE", "bet": 10}, headers=headers
        )

        assert response.status_code == 409
        assert response.json()["seed"] == 1
        assert client.get("/api/v1/zvc/balance", headers=headers).json()["balance"] == 50

    def test_other_player_gets_403(self, client, db_session, fake_redis):
        owner = login(fake_redis, PLAYER_STEAM_ID)
        intruder = login(fake_redis, OTHER_STEAM_ID)
        fund(db_session, PLAYER, 100)
        client.post("/api/v1/chickencross", json={"intent": "MOVE", "bet": 50}, headers=owner)

        response = client.post(
            "/api/v1/chickencross", json={"intent": "CASHOUT", "seed": 1}, headers=intruder
        )

        assert response.status_code == 403
        assert response.json()["error"] == "Unauthorized: You do not own this game"

    def test_missing_bet_for_new_game(self, client, fake_redis):
        headers = login(fake_redis, PLAYER_STEAM_ID)

        response = client.post("/api/v1/chickencross", json={"intent": "MOVE"}, headers=headers)

        assert response.status_code == 400
        assert response.json()["error"] == "Missing bet amount for new game"

    def test_unknown_seed_is_404(self, client, fake_redis):
        headers = login(fake_redis, PLAYER_STEAM_ID)

        response = client.get("/api/v1/chickencross?seed=999", headers=headers)

        assert response.status_code == 404
        assert response.json()["error"] == "Game not found"

    def test_seed_outside_seed_range_is_400(self, client, fake_redis):
        """seed 상한(2^31 - 1) 이상의 값은 DB까지 가지 않고 검증 단계에서 거부"""
        headers = login(fake_redis, PLAYER_STEAM_ID)
        too_large = 10**20

        detail = client.get(f"/api/v1/chickencross?seed={too_large}", headers=headers)
        move = client.post(
            "/api/v1/chickencross", json={"intent": "MOVE", "seed": too_large}, headers=headers
        )
        cashout = client.post(
            "/api/v1/chickencross",
            json={"intent": "CASHOUT", "seed": 2147483647},
            headers=headers,
        )

        for response in (detail, move, cashout):
            assert response.status_code == 400
            assert response.json()["code"] == "VALIDATION_001"


class TestCoinflipRoutes:
    """코인플립 API 테스트"""

    def test_create_list_accept(self, client, db_session, fake_redis, rng):
        initiator = login(fake_redis, PLAYER_STEAM_ID)
        opponent = login(fake_redis, OTHER_STEAM_ID)
        fund(db_session, PLAYER, 100)
        fund(db_session, f"{OTHER_STEAM_ID}@steam", 100)
        rng.ints = [1]

        created = client.post("/api/v1/coinflip", json={"bet": 30}, headers=initiator).json()
        open_list = client.get("/api/v1/coinflip/open", headers=opponent).json()
        result = client.post(f"/api/v1/coinflip/{created['id']}/accept", headers=opponent)

        assert created["state"] == "OPEN"
        assert [c["id"] for c in open_list["challenges"]] == [created["id"]]
        assert result.status_code == 200
        body = result.json()
        assert body["side"] == "tails"
        assert body["won"] is True
        assert body["newBalance"] == 130

    def test_self_accept_conflicts(self, client, db_session, fake_redis):
        initiator = login(fake_redis, PLAYER_STEAM_ID)
        fund(db_session, PLAYER, 100)
        created = client.post("/api/v1/coinflip", json={"bet": 30}, headers=initiator).json()

        response = client.post(f"/api/v1/coinflip/{created['id']}/accept", headers=initiator)

        assert response.status_code == 409

    def test_cancel(self, client, db_session, fake_redis):
        initiator = login(fake_redis, PLAYER_STEAM_ID)
        fund(db_session, PLAYER, 100)
        created = client.post("/api/v1/coinflip", json={"bet": 30}, headers=initiator).json()

        response = client.post(f"/api/v1/coinflip/{created['id']}/cancel", headers=initiator)

        assert response.status_code == 200
        assert response.json()["newBalance"] == 100
        assert response.json()["challenge"]["state"] == "CANCELLED"

    def test_unknown_challenge_is_404(self, client, fake_redis):
        headers = login(fake_redis, PLAYER_STEAM_ID)

        response = client.post(f"/api/v1/coinflip/{2**63 - 1}/cancel", headers=headers)

        assert response.status_code == 404

    def test_challenge_id_outside_bigint_is_400(self, client, fake_redis):
        headers = login(fake_redis, PLAYER_STEAM_ID)

        cancel = client.post(f"/api/v1/coinflip/{10**20}/cancel", headers=headers)
        accept = client.post(f"/api/v1/coinflip/{10**20}/accept", headers=headers)

        assert cancel.status_code == 400
        assert accept.status_code == 400


class TestAdminRoutes:
    """관리자 API 테스트"""

    def test_non_admin_is_forbidden(self, client, fake_redis):
        headers = login(fake_redis, PLAYER_STEAM_ID)

        response = client.get("/api/v1/admin/reduced-luck", headers=headers)

        assert response.status_code == 403
        assert response.json()["error"] == "Admin access required"

    def test_set_and_list_reduced_luck(self, client, fake_redis):
        # Given
        admin = login(fake_redis, ADMIN_STEAM_ID)

        # When
        response = client.post(
            "/api/v1/admin/reduced-luck",
            json={"playerId": PLAYER_STEAM_ID, "hasReducedLuck": True, "reason": "abuse"},
            headers=admin,
        )

        # Then
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["reducedLuckUsers"][0]["playerId"] == PLAYER
        assert json.loads(fake_redis.store[f"reduced_luck:{PLAYER}"])["reason"] == "abuse"

        listed = client.get("/api/v1/admin/reduced-luck", headers=admin).json()
        assert [entry["playerId"] for entry in listed["reducedLuckUsers"]] == [PLAYER]

        # When: 해제
        cleared = client.post(
            "/api/v1/admin/reduced-luck",
            json={"playerId": PLAYER, "hasReducedLuck": False},
            headers=admin,
        ).json()

        # Then
        assert cleared["reducedLuckUsers"] == []

    def test_adjust_balance(self, client, fake_redis):
        admin = login(fake_redis, ADMIN_STEAM_ID)
        player = login(fake_redis, PLAYER_STEAM_ID)

        response = client.post(
            "/api/v1/admin/zvc/adjust",
            json={"playerId": PLAYER_STEAM_ID, "amount": 500, "reason": "event reward"},
            headers=admin,
        )

        assert response.status_code == 200
        assert response.json()["balanceAfter"] == 500
        assert client.get("/api/v1/zvc/balance", headers=player).json()["balance"] == 500

    def test_adjust_rejects_zero(self, client, fake_redis):
        admin = login(fake_redis, ADMIN_STEAM_ID)

        response = client.post(
            "/api/v1/admin/zvc/adjust",
            json={"playerId": PLAYER_STEAM_ID, "amount": 0, "reason": "noop"},
            headers=admin,
        )

        assert response.status_code == 400

    def test_adjust_rejects_amount_outside_limit(self, client, fake_redis):
        admin = login(fake_redis, ADMIN_STEAM_ID)

        for amount in (10**20, -(10**20)):
            response = client.post(
                "/api/v1/admin/zvc/adjust",
                json={"playerId": PLAYER_STEAM_ID, "amount": amount, "reason": "typo"},
                headers=admin,
            )
            assert response.status_code == 400


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "database": True,
            "redis": True,
            "error": None,
        }
