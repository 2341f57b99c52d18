import asyncio

import pytest

from tests.fakes import FixedRandomSource, fund
from zvcapi.core.exceptions import (
    AuthorizationError,
    ChallengeClosedError,
    InsufficientBalanceError,
    NotFoundError,
    SelfChallengeError,
)
from zvcapi.games.coinflip import HEADS, TAILS
from zvcapi.models.coinflip import CoinflipState
from zvcapi.services.coinflip_service import CoinflipService

INITIATOR = "76561190000000002@steam"
OPPONENT = "76561190000000003@steam"
THIRD = "76561190000000004@steam"


@pytest.fixture
def coin_rng():
    return FixedRandomSource(ints=[0])


@pytest.fixture
def service(make_service, coin_rng):
    return make_service(CoinflipService, random_source=coin_rng)


def balance_of(service: CoinflipService, player_id: str) -> int:
    return service.ledger_service.get_balance(player_id).balance


class TestCoinflipService:
    """코인플립 서비스 테스트"""

    def test_create_escrows_stake(self, service, db_session):
        # Given
        fund(db_session, INITIATOR, 100)

        # When
        challenge = service.create_challenge(INITIATOR, 40)

        # Then
        assert challenge.state == CoinflipState.OPEN
        assert challenge.stake == 40
        assert balance_of(service, INITIATOR) == 60
        assert [c.id for c in service.list_open().challenges] == [challenge.id]

    def test_create_without_funds_leaves_no_challenge(self, service, db_session):
        fund(db_session, INITIATOR, 10)

        with pytest.raises(InsufficientBalanceError):
            service.create_challenge(INITIATOR, 40)

        assert service.list_open().challenges == []
        assert balance_of(service, INITIATOR) == 10

    def test_accept_heads_initiator_wins(self, service, db_session):
        # Given
        fund(db_session, INITIATOR, 100)
        fund(db_session, OPPONENT, 100)
        challenge = service.create_challenge(INITIATOR, 40)

        # When
        result = asyncio.run(service.accept_challenge(OPPONENT, challenge.id))

        # Then
        assert result.side == HEADS
        assert result.won is False
        assert result.payout == 0
        assert result.new_balance == 60
        assert result.challenge.state == CoinflipState.SETTLED
        assert result.challenge.winner_id == INITIATOR
        assert balance_of(service, INITIATOR) == 140
        assert balance_of(service, OPPONENT) == 60

    def test_accept_tails_opponent_wins(self, service, db_session, coin_rng):
        fund(db_session, INITIATOR, 100)
        fund(db_session, OPPONENT, 100)
        challenge = service.create_challenge(INITIATOR, 40)
        coin_rng.ints = [1]

        result = asyncio.run(service.accept_challenge(OPPONENT, challenge.id))

        assert result.side == TAILS
        assert result.won is True
        assert result.payout == 80
        assert result.new_balance == 140
        assert balance_of(service, INITIATOR) == 60

    def test_fee_is_withheld_from_pot(self, service, db_session, settings):
        settings.COINFLIP_FEE_PERCENT = 5
        fund(db_session, INITIATOR, 100)
        fund(db_session, OPPONENT, 100)
        challenge = service.create_challenge(INITIATOR, 100)

        result = asyncio.run(service.accept_challenge(OPPONENT, challenge.id))

        assert result.challenge.fee == 10
        assert result.challenge.payout == 190
        assert balance_of(service, INITIATOR) == 190
        assert balance_of(service, OPPONENT) == 0

    def test_cannot_accept_own_challenge(self, service, db_session):
        fund(db_session, INITIATOR, 100)
        challenge = service.create_challenge(INITIATOR, 40)

        with pytest.raises(SelfChallengeError):
            asyncio.run(service.accept_challenge(INITIATOR, challenge.id))

        assert service.list_open().challenges[0].state == CoinflipState.OPEN

    def test_settled_challenge_cannot_be_accepted_again(self, service, db_session):
        fund(db_session, INITIATOR, 100)
        fund(db_session, OPPONENT, 100)
        fund(db_session, THIRD, 100)
        challenge = service.create_challenge(INITIATOR, 40)
        asyncio.run(service.accept_challenge(OPPONENT, challenge.id))

        with pytest.raises(ChallengeClosedError):
            asyncio.run(service.accept_challenge(THIRD, challenge.id))

        assert balance_of(service, THIRD) == 100

    def test_opponent_without_funds_keeps_challenge_open(self, service, db_session):
        fund(db_session, INITIATOR, 100)
        fund(db_session, OPPONENT, 10)
        challenge = service.create_challenge(INITIATOR, 40)

        with pytest.raises(InsufficientBalanceError):
            asyncio.run(service.accept_challenge(OPPONENT, challenge.id))

        reopened = service.list_open().challenges
        assert reopened[0].id == challenge.id
        assert reopened[0].state == CoinflipState.OPEN
        assert reopened[0].opponent_id is None
        assert balance_of(service, OPPONENT) == 10

    def test_unknown_challenge(self, service):
        with pytest.raises(NotFoundError):
            asyncio.run(service.accept_challenge(OPPONENT, 404))

    def test_cancel_refunds_initiator(self, service, db_session):
        fund(db_session, INITIATOR, 100)
        challenge = service.create_challenge(INITIATOR, 40)

        response = service.cancel_challenge(INITIATOR, challenge.id)

        assert response.refunded == 40
        assert response.new_balance == 100
        assert response.challenge.state == CoinflipState.CANCELLED
        assert service.list_open().challenges == []

        with pytest.raises(ChallengeClosedError):
            service.cancel_challenge(INITIATOR, challenge.id)
        assert balance_of(service, INITIATOR) == 100

    def test_only_initiator_can_cancel(self, service, db_session):
        fund(db_session, INITIATOR, 100)
        challenge = service.create_challenge(INITIATOR, 40)

        with pytest.raises(AuthorizationError):
            service.cancel_challenge(OPPONENT, challenge.id)

    def test_reduced_luck_initiator_loses(self, service, db_session, reduced_luck_service):
        # Given: 난수는 개설자 승리(HEADS)지만 개설자가 reduced luck
        fund(db_session, INITIATOR, 100)
        fund(db_session, OPPONENT, 100)
        asyncio.run(reduced_luck_service.set_flag(INITIATOR, True))
        challenge = service.create_challenge(INITIATOR, 40)

        # When
        result = asyncio.run(service.accept_challenge(OPPONENT, challenge.id))

        # Then
        assert result.won is True
        assert result.challenge.winner_id == OPPONENT

    def test_money_is_conserved(self, service, db_session):
        fund(db_session, INITIATOR, 100)
        fund(db_session, OPPONENT, 100)
        for _ in range(5):
            challenge = service.create_challenge(INITIATOR, 10)
            asyncio.run(service.accept_challenge(OPPONENT, challenge.id))

        assert balance_of(service, INITIATOR) + balance_of(service, OPPONENT) == 200
        assert service.ledger_service.verify_integrity(INITIATOR).status == "OK"
        assert service.ledger_service.verify_integrity(OPPONENT).status == "OK"
