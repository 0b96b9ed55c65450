"""Entry point for the vocab arcade CLI client."""

import argparse
import sys

from cli.api_client import ArcadeAPIClient
from cli.console import ConsoleUI


def main():
    parser = argparse.ArgumentParser(description='Vocab Arcade - timed vocabulary rounds')
    parser.add_argument(
        '--server',
        default='http://localhost:8000',
        help='Server URL (default: http://localhost:8000)'
    )
    parser.add_argument(
        '--user',
        default='default',
        help='User ID (default: default)'
    )
    parser.add_argument('--game', default='balloon',
                        choices=['balloon', 'falling', 'matching', 'vocalizing-homograph'])
    parser.add_argument('--mode', default='random', choices=['random', 'theme', 'pos', 'review'])
    parser.add_argument('--category', default=None, help='Topic tag or part of speech')
    parser.add_argument('--min-frequency', type=int, default=1)
    parser.add_argument('--max-frequency', type=int, default=6000)
    parser.add_argument('--unvocalized', action='store_true', help='Show unvocalized script')
    parser.add_argument('--duration', type=int, default=60, help='Round length in seconds')
    parser.add_argument('--count', type=int, default=None, help='Fixed number of questions')
    args = parser.parse_args()

    client = ArcadeAPIClient(base_url=args.server, user_id=args.user)
    ui = ConsoleUI(client)

    try:
        ui.run({
            'game_type': args.game,
            'selection_mode': args.mode,
            'topic_or_pos': args.category,
            'frequency_min': args.min_frequency,
            'frequency_max': args.max_frequency,
            'display_form': 'unvocalized' if args.unvocalized else 'vocalized',
            'duration': args.duration,
            'question_count': args.count,
        })
    except KeyboardInterrupt:
        print('\nGoodbye!')
        sys.exit(0)


if __name__ == '__main__':
    main()
