"""
This module is used to execute a game of Blackjack.

It can be used to play a game in different modes:
- Interactive console mode, where the user interacts with the game via the console.
- Simulation mode, where the game runs automatically.
- Logging mode, where game output is logged to a specified file.
- Visualization mode, where a real-time graph of earnings is displayed.

To run the game in different modes, specific command line arguments are used.
For example, `--console` runs the game in interactive console mode,
`--simulate` runs the game in simulation mode and `--log_file` followed by a filename runs the game in logging mode.
`--vis` enables real-time visualization of the simulation results.
"""

import argparse
import asyncio
import logging
import random
import time
from typing import Callable, List, Optional

import matplotlib.pyplot as plt

from twentyone.blackjack.actor import Player
from twentyone.blackjack.bankroll import (
    Bankroll,
    InsufficientFundsError,
    InvalidWagerError,
    format_amount,
    report_earnings_progression,
)
from twentyone.blackjack.round import Round, RoundEngine
from twentyone.blackjack.rules import Rules
from twentyone.blackjack.stats import SimulationStats
from twentyone.common.io_interface import (
    ConsoleIOInterface,
    DummyIOInterface,
    InputError,
    IOInterface,
    LoggingIOInterface,
)
from twentyone.common.shoe import Shoe
from twentyone.events import EngineEventType, EventEmitter
from twentyone.ui.renderer import TextRenderer

logger = logging.getLogger(__name__)


class BlackjackGraph:
    def __init__(self, max_games):
        self.max_games = max_games
        self.games = []
        self.net_earnings = []

        plt.ion()  # Turn on interactive mode
        self.fig, self.ax = plt.subplots()
        (self.line,) = self.ax.plot([], [], "b-")

        self.ax.set_xlim(0, max_games)
        self.ax.set_ylim(-100, 100)
        self.ax.set_title("Blackjack Performance")
        self.ax.set_xlabel("Games")
        self.ax.set_ylabel("Net Earnings")
        self.ax.grid(True)

    def update(self, game_number, earnings):
        self.games.append(game_number)
        self.net_earnings.append(earnings)

        self.line.set_data(self.games, self.net_earnings)

        if game_number > self.ax.get_xlim()[1]:
            self.ax.set_xlim(0, game_number + 10)

        y_min = min(self.net_earnings) - 10
        y_max = max(self.net_earnings) + 10
        self.ax.set_ylim(y_min, y_max)

        self.fig.canvas.draw()
        self.fig.canvas.flush_events()


class BlackjackGame:
    """
    A class to represent a game of single-player Blackjack across many rounds.

    Attributes
    ----------
    rules : Rules
        Object defining game rules.
    io_interface : IOInterface
        Interface for input and output operations.
    emitter : EventEmitter
        Event emitter the rounds report through.
    engine : RoundEngine
        Plays the individual rounds.
    shoe : Shoe
        Shoe of cards for the game.
    bankroll : Bankroll
        The player's balance.
    stats : SimulationStats
        Statistics for the game.
    """

    def __init__(
        self,
        rules: Rules,
        io_interface: IOInterface,
        shoe: Optional[Shoe] = None,
        emitter: Optional[EventEmitter] = None,
        rng: Optional[random.Random] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.rules = rules
        self.io_interface = io_interface
        self.emitter = emitter or EventEmitter()
        self.renderer = TextRenderer(io_interface).attach(self.emitter)
        self.player = Player(io_interface, self.emitter)
        self.engine = RoundEngine(self.player, rules, emitter=self.emitter, sleep=sleep)
        self.shoe = shoe or Shoe(num_decks=rules.num_decks, rng=rng)
        self.bankroll = Bankroll(rules.starting_balance, rules.min_bet)
        self.stats = SimulationStats()

    def announce_rules(self):
        """Show the balance and the house rules."""
        self.io_interface.output(
            f"Your balance: {self.rules.currency}{format_amount(self.bankroll.balance)}\n"
        )
        for line in self.rules.describe():
            self.io_interface.output(line)

    def replace_shoe_if_needed(self) -> bool:
        """Reset and shuffle the shoe once enough of it has been dealt."""
        if not self.rules.should_replace(self.shoe.dealt_count, self.shoe.undealt_count):
            return False
        logger.info(
            "Replacing shoe after %d of %d cards (%.0f%% penetration)",
            self.shoe.dealt_count,
            self.shoe.total_cards,
            self.shoe.get_penetration_percentage() * 100,
        )
        self.shoe.reset()
        self.shoe.shuffle()
        self.emitter.emit(EngineEventType.SHUFFLE, {"cards": self.shoe.undealt_count})
        return True

    def prompt_wager(self) -> float:
        """Ask for a wager until a valid one is given."""
        while True:
            try:
                amount = self.io_interface.request_wager(
                    self.bankroll.balance, self.rules.min_bet
                )
                return self.bankroll.validate_wager(amount)
            except (InputError, InvalidWagerError, InsufficientFundsError) as e:
                logger.warning("Rejected wager: %s", e)
                self.emitter.emit(
                    EngineEventType.INPUT_ERROR,
                    {"player": self.player.name, "message": str(e)},
                )

    def play_round(self) -> Round:
        """
        Play one round: shoe check, wager, round, settlement.

        Raises:
            InsufficientFundsError: If the balance no longer covers the minimum bet.
        """
        if self.bankroll.balance < self.rules.min_bet:
            raise InsufficientFundsError(
                f"Your balance of {self.rules.currency}{format_amount(self.bankroll.balance)} "
                f"is below the minimum bet of {self.rules.currency}{format_amount(self.rules.min_bet)}."
            )
        self.announce_rules()
        self.replace_shoe_if_needed()
        wager = self.prompt_wager()

        rnd = self.engine.play(wager, self.shoe)

        balance = self.bankroll.balance
        self.io_interface.output(
            report_earnings_progression(balance, rnd.delta, self.rules.currency) + "\n"
        )
        if self.bankroll.settle(rnd.delta):
            self.io_interface.output("You were donated a cent from charity.")
        self.stats.update(rnd)
        return rnd


def create_io_interface(args) -> IOInterface:
    """Create the IO interface based on the command line arguments."""
    if args.simulate:
        answers = DummyIOInterface(
            stand_on=args.stand_on, double_down=args.double, wager=args.bet
        )
        if args.log_file:
            return LoggingIOInterface(args.log_file, answers)
        return answers
    return ConsoleIOInterface()


def create_rules(args) -> Rules:
    """Create the Rules object based on the command line arguments."""
    return Rules(
        num_decks=args.decks,
        dealer_policy=args.policy,
        starting_balance=args.balance,
        dealing_delay=0.0 if (args.simulate or args.no_delay) else 0.8,
    )


def run_console(game: BlackjackGame, num_games: Optional[int]):
    played = 0
    try:
        while num_games is None or played < num_games:
            game.play_round()
            played += 1
            game.io_interface.input("Press enter to continue...")
    except (KeyboardInterrupt, EOFError):
        print()
    except InsufficientFundsError as e:
        print(e)
    print(
        f"Final balance: {game.rules.currency}{format_amount(game.bankroll.balance)}"
    )


async def log_report_async(io_interface: LoggingIOInterface, lines: List[str]):
    """Append the simulation report to the game log."""
    for line in lines:
        await io_interface.output_async(line)


def run_simulation(game: BlackjackGame, num_games: int, vis: bool):
    graph = BlackjackGraph(num_games) if vis else None

    start_time = time.time()
    for game_number in range(1, num_games + 1):
        try:
            game.play_round()
        except InsufficientFundsError as e:
            logger.warning("Simulation stopped after %d games: %s", game_number - 1, e)
            print(f"Simulation stopped early: {e}")
            break
        if graph:
            graph.update(game_number, game.stats.net_earnings)
    duration = time.time() - start_time
    report = game.stats.report()
    games_per_second = report["games_played"] / duration if duration > 0 else 0

    lines = [
        "Simulation completed.",
        f"Games played: {report['games_played']:,}",
        f"Player wins: {report['player_wins']:,}",
        f"Dealer wins: {report['dealer_wins']:,}",
        f"Draws: {report['draws']:,}",
        f"Naturals: {report['naturals']:,}",
        f"Double downs: {report['double_downs']:,}",
        f"Net Earnings: ${report['net_earnings']:,.2f}",
        f"Total Bets: ${report['total_wagered']:,.2f}",
        f"House Edge: {game.stats.house_edge:.2f}%",
        f"Final balance: ${game.bankroll.balance:,.2f}",
    ]
    for line in lines:
        print(line)
    print(f"\nDuration of simulation: {duration:.2f} seconds")
    print(f"Games simulated per second: {games_per_second:,.2f}")

    if isinstance(game.io_interface, LoggingIOInterface):
        asyncio.run(log_report_async(game.io_interface, lines))

    if graph:
        plt.ioff()
        plt.show()  # Keep the graph window open after simulation ends


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Play single-player Blackjack.")
    parser.add_argument(
        "--console",
        action="store_true",
        help="Run the game in interactive console mode (the default).",
        default=False,
    )
    parser.add_argument(
        "--simulate",
        action="store_true",
        help="Run the game in simulation mode. If --log_file is provided, output will be logged.",
        default=False,
    )
    parser.add_argument(
        "--num_games",
        type=int,
        default=None,
        help="Number of rounds to play (simulation default: 1000, console default: unlimited)",
    )
    parser.add_argument(
        "--log_file",
        type=str,
        help="Log simulated game output to the specified file.",
    )
    parser.add_argument(
        "--double",
        action="store_true",
        help="In simulation mode, double down every round.",
        default=False,
    )
    parser.add_argument(
        "--stand_on",
        type=int,
        default=17,
        help="In simulation mode, stand once the hand is worth this much.",
    )
    parser.add_argument(
        "--bet", type=float, default=1.0, help="In simulation mode, the wager per round."
    )
    parser.add_argument(
        "--policy",
        choices=["ahead", "fixed"],
        default="ahead",
        help="Dealer policy: 'ahead' also stands once beating the player, 'fixed' only stands on 18+.",
    )
    parser.add_argument("--decks", type=int, default=4, help="Number of decks in the shoe")
    parser.add_argument(
        "--balance", type=float, default=100.0, help="Starting balance"
    )
    parser.add_argument(
        "--no-delay",
        dest="no_delay",
        action="store_true",
        help="Do not pause while dealing.",
        default=False,
    )
    parser.add_argument(
        "--vis",
        action="store_true",
        help="Visualize the simulation results in real-time graph.",
        default=False,
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )
    return parser


def main(argv=None):
    """
    Main function to start the game.

    It handles command-line arguments to determine the mode of operation of the game,
    creates the game and plays it in the console or as a simulation.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    try:
        io_interface = create_io_interface(args)
        rules = create_rules(args)
    except ValueError as e:
        parser.error(str(e))
    game = BlackjackGame(rules, io_interface)

    if args.simulate:
        run_simulation(game, args.num_games or 1000, args.vis)
    else:
        run_console(game, args.num_games)


if __name__ == "__main__":
    main()
