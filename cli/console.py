"""Console UI for wordplay application."""

import time

from core.config import GRID_SIZE, MAX_ATTEMPTS, POINTS_PER_LINE, RESOLVE_DELAY, MISMATCH_FEEDBACK_DELAY
from core.models import language_label
from cli.api_client import WordplayAPIClient

# Long enough for a pair to be judged and its feedback to finish
RESOLUTION_WAIT = RESOLVE_DELAY + MISMATCH_FEEDBACK_DELAY + 0.2

PIECE_CHAR = '#'
EMPTY_CHAR = '.'


class ConsoleUI:
    """Console user interface for wordplay application."""

    def __init__(self, client: WordplayAPIClient):
        self.client = client

    def print_messages(self, response: dict):
        """Print notifications returned by the server."""
        for message in response.get('messages', []):
            marker = '!' if message['variant'] == 'destructive' else '*'
            print(f"{marker} {message['title']}: {message['description']}")
        if response.get('celebrations'):
            print('*** \\o/ ***')

    def print_sets(self, sets: list[dict]):
        print('\n' + '=' * 50)
        print('VOCABULARY SETS')
        print('=' * 50)
        for i, s in enumerate(sets, 1):
            languages = ', '.join(language_label(lang) for lang in s['languages'])
            print(f"  {i}. {s['name']} ({languages}) - {s['word_count']} words, "
                  f"{s['usable_word_count']} playable")
        print('=' * 50)

    def choose_set(self) -> str | None:
        sets = self.client.list_sets()
        if not sets:
            print('No vocabulary sets found. Seed some with: python -m scripts.seed_sets')
            return None
        self.print_sets(sets)
        while True:
            choice = input('Set number ==> ').strip()
            if choice.lower() == 'exit':
                return None
            if choice.isdigit() and 1 <= int(choice) <= len(sets):
                return sets[int(choice) - 1]['id']
            print(f'Enter a number between 1 and {len(sets)}')

    # Matching

    def print_cards(self, game: dict):
        print('\n' + '-' * 50)
        print(f"Pairs: {game['matched_pairs']}/{game['total_pairs']} | "
              f"Moves: {game['moves']} | Time: {game['elapsed_display']}")
        print('-' * 50)
        for i, card in enumerate(game['cards'], 1):
            if card['is_matched']:
                continue
            mark = '>' if card['is_selected'] else ' '
            print(f"{mark} {i:2d}. {card['text']} ({language_label(card['language'])})")
        print('-' * 50)

    def play_matching(self, set_id: str):
        response = self.client.start_matching(set_id)
        self.print_messages(response)
        if not response['success']:
            return

        print('Pick two cards that mean the same thing. "exit" to stop.')
        game = response['game']
        while game['state'] == 'playing':
            self.print_cards(game)
            picks = []
            while len(picks) < 2:
                user_input = input(f'Card {len(picks) + 1} ==> ').strip()
                if user_input.lower() == 'exit':
                    self.client.reset_matching()
                    return
                if not user_input.isdigit() or not 1 <= int(user_input) <= len(game['cards']):
                    print('Enter a card number from the list')
                    continue
                card = game['cards'][int(user_input) - 1]
                response = self.client.select_card(card['id'])
                self.print_messages(response)
                if response['game']['selected_cards'] != game['selected_cards']:
                    picks.append(card['id'])
                game = response['game']

            time.sleep(RESOLUTION_WAIT)
            response = self.client.get_matching()
            self.print_messages(response)
            game = response['game']

        if game['result']:
            result = game['result']
            print(f"\nDone! {result['matched_pairs']} pairs in {game['elapsed_display']}, "
                  f"{result['moves']} moves.\n")

    # Puzzle

    def print_grid(self, grid: list[list]):
        print('   ' + ' '.join(str(c) for c in range(GRID_SIZE)))
        for r, row in enumerate(grid):
            cells = ' '.join(PIECE_CHAR if cell else EMPTY_CHAR for cell in row)
            print(f'{r:2d} {cells}')

    def print_pieces(self, pieces: list[dict]):
        for i, piece in enumerate(pieces, 1):
            print(f'Piece {i} ({piece["color"]}):')
            for row in piece['shape']:
                print('   ' + ' '.join(PIECE_CHAR if cell else ' ' for cell in row))

    def print_challenge(self, game: dict):
        challenge = game['challenge']
        if not challenge:
            return
        print(f"\nTranslate ({language_label(challenge['question_language'])}): "
              f">>> {challenge['question_text']} <<<")
        print(f"Attempts left: {challenge['attempts_left']}/{MAX_ATTEMPTS}")

    def print_revealed(self, answers: list[dict]):
        print('Correct answers:')
        for answer in answers:
            print(f"  {language_label(answer['language'])}: {answer['text']}")

    def play_puzzle(self, set_id: str):
        response = self.client.start_puzzle(set_id)
        self.print_messages(response)
        if not response['success']:
            return

        print(f'Answer questions to earn pieces. Full rows/columns score {POINTS_PER_LINE} points.')
        print('Commands: "skip" for a new word, "exit" to quit')
        game = response['game']
        while game['state'] != 'game_over':
            print(f"\nScore: {game['score']} | Correct words: {game['correct_words']}")
            if game['state'] == 'answering':
                if game['showing_answer'] or not game['challenge']:
                    time.sleep(1)
                    response = self.client.get_puzzle()
                    self.print_messages(response)
                    game = response['game']
                    continue
                self.print_challenge(game)
                user_input = input('==> ').strip()
                if user_input.lower() == 'exit':
                    return
                if user_input.lower() == 'skip':
                    response = self.client.skip_challenge()
                elif user_input:
                    response = self.client.submit_answer(user_input)
                    answer = response.get('answer') or {}
                    if answer.get('revealed'):
                        self.print_revealed(answer['correct_answers'])
                else:
                    continue
            else:
                self.print_grid(game['grid'])
                self.print_pieces(game['pieces'])
                user_input = input('piece row col ==> ').strip()
                if user_input.lower() == 'exit':
                    return
                parts = user_input.split()
                if len(parts) != 3 or not all(p.isdigit() for p in parts):
                    print('Enter three numbers, e.g. "1 0 4"')
                    continue
                piece, row, col = (int(p) for p in parts)
                if not 0 <= row < GRID_SIZE or not 0 <= col < GRID_SIZE:
                    print(f'Row and column go from 0 to {GRID_SIZE - 1}')
                    continue
                response = self.client.place_piece(piece - 1, row, col)
                if not response['success']:
                    print('That piece does not fit there.')
            self.print_messages(response)
            game = response['game']

        self.print_grid(game['grid'])
        result = game['result'] or {}
        print(f"\nGame over! Score: {result.get('score', 0)}, "
              f"correct words: {result.get('correct_words', 0)}\n")

    def run(self):
        """Run the main application loop."""
        # Check server connection
        try:
            health = self.client.health_check()
            print(f"Connected to wordplay server ({health['service']})")
        except Exception:
            print(f"Error: Cannot connect to server at {self.client.base_url}")
            print("Make sure the server is running: python run_server.py")
            return

        while True:
            print('\nGames: 1. matching  2. puzzle  (or "exit")')
            choice = input('==> ').strip().lower()
            if choice == 'exit':
                print('Goodbye!')
                return
            if choice not in ('1', '2', 'matching', 'puzzle'):
                continue
            set_id = self.choose_set()
            if not set_id:
                continue
            if choice in ('1', 'matching'):
                self.play_matching(set_id)
            else:
                self.play_puzzle(set_id)
