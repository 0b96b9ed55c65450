"""Console UI for the vocab arcade."""

import requests

from cli.api_client import ArcadeAPIClient


class ConsoleUI:
    """Plays rounds in a terminal: one question at a time, options numbered."""

    def __init__(self, client: ArcadeAPIClient):
        self.client = client

    def print_round(self, state: dict):
        """Print the current question and the answers still on screen."""
        print('\n' + '=' * 50)
        print(f"Score: {state['score']}   Time: {state['time_remaining']}s ({state['urgency']})")
        if state['questions_left'] is not None:
            print(f"Words left: {state['questions_left']}")
        if state['message']:
            print(state['message'])
        question = state.get('question')
        if question and state['question_open']:
            print(f"\n    {question['prompt']}\n")
            for index, entity in enumerate(state['entities'], 1):
                print(f"  {index}. {entity['label']}")
        print('=' * 50)

    def print_result(self, result: dict):
        print('\n' + '=' * 50)
        print('ROUND OVER')
        print('=' * 50)
        print(f"Final score: {result['final_score']}")
        print(f"Correct: {result['correct']}  Wrong: {result['wrong']}  Missed: {result['missed']}")
        if result['missed_or_wrong']:
            print('\nWords to review:')
            for record in result['missed_or_wrong']:
                script = record['vocalized'] or record['unvocalized']
                print(f"  {script} -> {record['english']}")

    def print_session(self, session: dict):
        print(f"\nSession total: {session['total_score']} over {session['rounds_played']} rounds")
        print(f"Words to review: {session['review_count']}")

    def read_choice(self, state: dict) -> bool:
        """Read one command. Returns False when the player quits."""
        choice = input('Answer (number or text, r=restart, q=quit): ').strip()
        if not choice:
            return True
        if choice.lower() == 'q':
            self.client.stop_round()
            return False
        if choice.lower() == 'r':
            self.client.restart_round()
            return True

        # Answers refer to the question that was shown; the server rejects
        # them if it has moved on while we were typing
        question_id = (state.get('question') or {}).get('id')
        if choice.isdigit():
            entities = state['entities']
            index = int(choice) - 1
            if 0 <= index < len(entities):
                response = self.client.select(entities[index]['id'], question_id)
            else:
                print('No such option.')
                return True
        else:
            response = self.client.answer(choice, question_id)

        outcome = response['outcome']
        if outcome == 'stale':
            print('Too late, that question is gone.')
        elif outcome == 'unmatched':
            print('That answer is not on screen.')
        return True

    def run(self, round_options: dict):
        """Main loop."""
        try:
            health = self.client.health_check()
        except requests.RequestException as e:
            print(f"Cannot reach server: {e}")
            return
        if health.get('status') != 'ok':
            print(f"Server has no vocabulary: {health.get('error')}")
            return

        try:
            state = self.client.start_round(**round_options)
        except requests.HTTPError as e:
            detail = e.response.json().get('detail') if e.response is not None else str(e)
            print(f"Cannot start round: {detail}")
            return

        while state['state'] == 'running':
            self.print_round(state)
            if not self.read_choice(state):
                break
            state = self.client.get_round()

        if state.get('result'):
            self.print_result(state['result'])
        self.print_session(self.client.get_session())
