"""
Full rounds played from stacked shoes.

Cards come off the shoe in the order dealer, dealer, player, player, then
whatever the turns draw.
"""

import pytest
from unittest.mock import Mock

from twentyone.blackjack.action import Decision
from twentyone.blackjack.actor import Player
from twentyone.blackjack.outcome import BUST, Holding, RoundResult
from twentyone.blackjack.round import Round, RoundEngine
from twentyone.blackjack.rules import Rules
from twentyone.common.io_interface import InputError
from twentyone.common.shoe import ShoeExhaustedError


def event_names(recorded_events):
    return [event_type for event_type, _ in recorded_events]


class TestNaturals:
    def test_player_natural_wins_sixty_percent(self, engine, stacked_shoe):
        rnd = engine.play(10.0, stacked_shoe("9 7 A K"))

        assert rnd.delta == 6.0
        assert rnd.result is RoundResult.WIN
        assert rnd.reason == "player_natural"
        assert rnd.natural

    def test_both_naturals_push(self, engine, stacked_shoe):
        assert engine.play_round(10.0, stacked_shoe("A K K A")) == 0.0

    def test_dealer_natural_loses_the_wager(self, engine, stacked_shoe):
        rnd = engine.play(10.0, stacked_shoe("K A 9 7"))

        assert rnd.delta == -10.0
        assert rnd.reason == "dealer_natural"

    def test_natural_skips_both_turns(self, engine, stacked_shoe, io, recorded_events):
        engine.play(10.0, stacked_shoe("9 7 A K"))

        assert io.decision_requests == 0
        assert "PLAYER_TURN" not in event_names(recorded_events)
        assert "DEALER_TURN" not in event_names(recorded_events)

    def test_no_natural_moves_to_player_turn(self, engine, stacked_shoe, io):
        io.add_decision(Decision.STAND)
        rnd = engine.play(10.0, stacked_shoe("10 8 10 9"))

        assert rnd.history[:3] == ["DealingState", "NaturalCheckState", "PlayerTurnState"]
        assert not rnd.natural


class TestPlayerTurn:
    def test_stand_then_dealer_draws_to_win(self, engine, stacked_shoe, io):
        io.add_decision(Decision.STAND)
        rnd = engine.play(10.0, stacked_shoe("9 7 10 6 5"))

        assert rnd.player_outcome == Holding(16)
        assert rnd.dealer_outcome == Holding(21)
        assert rnd.result is RoundResult.LOSS
        assert rnd.reason == "showdown"
        assert rnd.delta == -10.0

    def test_hits_until_bust(self, engine, stacked_shoe, io):
        io.add_decision(Decision.HIT)
        io.add_decision(Decision.HIT)
        rnd = engine.play(10.0, stacked_shoe("10 7 10 2 5 K"))

        assert rnd.player_outcome is BUST
        assert rnd.reason == "player_bust"
        assert rnd.delta == -10.0
        assert len(rnd.player_hand) == 4
        # The dealer does not play against a busted hand
        assert len(rnd.dealer_hand) == 2
        assert rnd.history[-1] == "PlayerBustState"

    def test_input_errors_are_retried(self, engine, stacked_shoe, io, recorded_events):
        io.add_decision(InputError("'x' is not a decision"))
        io.add_decision(Decision.STAND)

        rnd = engine.play(10.0, stacked_shoe("10 8 10 9"))

        assert rnd.delta == 6.0
        assert io.decision_requests == 2
        assert event_names(recorded_events).count("INPUT_ERROR") == 1


class TestDoubleDown:
    def test_double_down_win_doubles_the_payout(self, engine, stacked_shoe, io):
        io.add_double_down(True)
        rnd = engine.play(10.0, stacked_shoe("10 7 5 6 9 10"))

        assert rnd.doubled
        assert rnd.player_outcome == Holding(20)
        assert rnd.reason == "dealer_bust"
        assert rnd.delta == 12.0

    def test_double_down_bust_skips_the_stand(
        self, engine, stacked_shoe, io, recorded_events
    ):
        io.add_double_down(True)
        rnd = engine.play(10.0, stacked_shoe("9 8 10 6 K"))

        assert rnd.delta == -20.0
        actions = [data for name, data in recorded_events if name == "PLAYER_ACTION"]
        assert len(actions) == 1
        assert actions[0]["decision"] is Decision.HIT

    def test_double_down_hits_once_then_stands(
        self, engine, stacked_shoe, io, recorded_events
    ):
        io.add_double_down(True)
        engine.play(10.0, stacked_shoe("10 8 5 4 9"))

        actions = [data for name, data in recorded_events if name == "PLAYER_ACTION"]
        assert [a["decision"] for a in actions] == [Decision.HIT, Decision.STAND]
        assert io.decision_requests == 0

    def test_double_down_push_is_zero(self, engine, stacked_shoe, io):
        io.add_double_down(True)
        rnd = engine.play(10.0, stacked_shoe("10 8 5 4 9"))

        assert rnd.doubled
        assert rnd.result is RoundResult.PUSH
        assert rnd.delta == 0.0


class TestDealerTurn:
    def test_showdown_win(self, engine, stacked_shoe, io):
        io.add_decision(Decision.STAND)
        rnd = engine.play(10.0, stacked_shoe("10 8 10 9"))

        assert rnd.result is RoundResult.WIN
        assert rnd.reason == "showdown"
        assert rnd.delta == 6.0
        assert rnd.history == [
            "DealingState",
            "NaturalCheckState",
            "PlayerTurnState",
            "DealerRevealState",
            "DealerTurnState",
            "ShowdownState",
        ]

    def test_dealer_stands_when_ahead(self, engine, stacked_shoe, io):
        io.add_decision(Decision.STAND)
        rnd = engine.play(10.0, stacked_shoe("10 7 10 5 5"))

        assert rnd.dealer_outcome == Holding(17)
        assert rnd.delta == -10.0

    def test_fixed_policy_dealer_hits_below_threshold(self, io, emitter, stacked_shoe):
        rules = Rules(dealing_delay=0, dealer_policy="fixed")
        engine = RoundEngine(Player(io, emitter), rules, emitter=emitter)
        io.add_decision(Decision.STAND)

        rnd = engine.play(10.0, stacked_shoe("10 7 10 5 5"))

        assert rnd.dealer_outcome is BUST
        assert rnd.reason == "dealer_bust"
        assert rnd.delta == 6.0

    def test_event_sequence(self, engine, stacked_shoe, io, recorded_events):
        io.add_decision(Decision.STAND)
        engine.play(10.0, stacked_shoe("10 8 10 9"))

        assert event_names(recorded_events) == [
            "ROUND_STARTED",
            "CARD_DEALT",
            "CARD_DEALT",
            "CARD_DEALT",
            "CARD_DEALT",
            "PLAYER_TURN",
            "PLAYER_ACTION",
            "HOLE_CARD_REVEALED",
            "DEALER_TURN",
            "DEALER_ACTION",
            "HAND_RESULT",
            "ROUND_ENDED",
        ]


class TestHoleCard:
    def test_hole_card_is_dealt_face_down(self, engine, stacked_shoe, recorded_events):
        engine.play(10.0, stacked_shoe("9 7 A K"))

        dealt = [data for name, data in recorded_events if name == "CARD_DEALT"]
        assert [d["to"] for d in dealt] == ["dealer", "dealer", "player", "player"]
        assert dealt[1]["hidden"] is True
        assert dealt[1]["card"] is None
        assert dealt[1]["value"] is None
        assert dealt[0]["hidden"] is False
        assert dealt[3]["blackjack"] is True

    def test_hole_card_completing_a_natural_is_shown(
        self, engine, stacked_shoe, recorded_events
    ):
        rnd = engine.play(10.0, stacked_shoe("K A 9 7"))

        dealt = [data for name, data in recorded_events if name == "CARD_DEALT"]
        assert dealt[1]["hidden"] is False
        assert str(dealt[1]["card"]) == "A♦"
        assert not rnd.hole_card_hidden

    def test_hole_card_revealed_before_dealer_turn(
        self, engine, stacked_shoe, io, recorded_events
    ):
        io.add_decision(Decision.STAND)
        rnd = engine.play(10.0, stacked_shoe("10 8 10 9"))

        revealed = [d for name, d in recorded_events if name == "HOLE_CARD_REVEALED"]
        assert revealed == [
            {"card": rnd.dealer_hand.cards[1], "cards": rnd.dealer_hand.cards, "value": 18}
        ]
        assert not rnd.hole_card_hidden


class TestSettlement:
    def test_hand_result_summary(self, engine, stacked_shoe, recorded_events):
        engine.play(10.0, stacked_shoe("9 7 A K"))

        summaries = [d for name, d in recorded_events if name == "HAND_RESULT"]
        assert len(summaries) == 1
        summary = summaries[0]
        assert summary["result"] is RoundResult.WIN
        assert summary["player_value"] == 21
        assert summary["dealer_value"] == 16
        assert recorded_events[-1] == ("ROUND_ENDED", {"delta": 6.0})

    @pytest.mark.parametrize(
        "wager, expected",
        [(10.0, 6.0), (0.05, 0.03), (0.01, 0.01), (12.5, 7.5), (33.33, 20.0)],
    )
    def test_win_is_rounded_to_cents(self, engine, stacked_shoe, wager, expected):
        assert engine.play_round(wager, stacked_shoe("9 7 A K")) == expected

    def test_settlement_helper(self, engine):
        rnd = Round(10.0)
        rnd.doubled = True
        assert engine.settlement(rnd, RoundResult.WIN) == 12.0
        assert engine.settlement(rnd, RoundResult.LOSS) == -20.0
        assert engine.settlement(rnd, RoundResult.PUSH) == 0.0

    def test_exhausted_shoe_propagates(self, engine, stacked_shoe):
        with pytest.raises(ShoeExhaustedError):
            engine.play(10.0, stacked_shoe("10 7 10"))

    def test_dealing_delay_uses_sleep(self, io, emitter, stacked_shoe):
        sleep = Mock()
        rules = Rules(dealing_delay=0.5)
        engine = RoundEngine(Player(io, emitter), rules, emitter=emitter, sleep=sleep)
        io.add_decision(Decision.STAND)

        engine.play(10.0, stacked_shoe("10 8 10 9"))

        # Four dealt cards and the hole card reveal
        assert sleep.call_count == 5
        sleep.assert_called_with(0.5)

    def test_no_delay_never_sleeps(self, io, emitter, stacked_shoe):
        sleep = Mock()
        engine = RoundEngine(Player(io, emitter), Rules(dealing_delay=0), sleep=sleep)
        engine.play(10.0, stacked_shoe("9 7 A K"))
        sleep.assert_not_called()
