"""Tests for the API server and the CSV vocabulary source."""

import os
import tempfile
import time
import unittest
from unittest import mock

from fastapi.testclient import TestClient

from core.errors import DataLoadFailure
from core.interfaces import VocabularySource
from core.vocabulary import SEED_ROWS, StaticVocabularySource
from server.app import app, load_vocabulary
from server.csv_source import CsvVocabularySource, map_columns

# vocalized prompt -> English gloss
PROMPT_TO_GLOSS = {row[1]: row[0] for row in SEED_ROWS}


class TestCsvVocabularySource(unittest.TestCase):
    """Tests for CsvVocabularySource."""

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmpdir.cleanup()

    def write_csv(self, text):
        path = os.path.join(self.tmpdir.name, 'vocab.csv')
        with open(path, 'w', encoding='utf-8') as f:
            f.write(text)
        return path

    def test_load_with_original_headers(self):
        path = self.write_csv(
            'English,Vocalized Syriac,Non vocalized Syriac,Grammatical Category,Vocabulary Category,Frequency\n'
            'head,ܪܺܫܳܐ,ܪܫܐ,Noun,body-parts,212\n'
            ',ܥܰܝܢܳܐ,ܥܝܢܐ,Noun,body-parts,301\n'
            'hand,,,Noun,body-parts,95\n'
            'ear,ܐܶܕܢܳܐ,ܐܕܢܐ,Noun,body-parts,"1,204"\n'
            'king,ܡܰܠܟܳܐ,,Noun,government-law,abc\n'
        )
        records = CsvVocabularySource(path).load()
        self.assertEqual([r.english for r in records], ['head', 'ear', 'king'])
        ear = records[1]
        self.assertEqual(ear.frequency, 1204)
        self.assertEqual(ear.topic, 'body-parts')
        king = records[2]
        self.assertIsNone(king.frequency)
        self.assertEqual(king.unvocalized, '')

    def test_lone_script_column(self):
        path = self.write_csv(
            'English,Syriac,Part of Speech,Topic,Frequency\n'
            'father,ܐܰܒ݂ܳܐ,Noun,family,30\n'
        )
        records = CsvVocabularySource(path).load()
        self.assertEqual(records[0].vocalized, 'ܐܰܒ݂ܳܐ')
        self.assertEqual(records[0].display_text(), 'ܐܰܒ݂ܳܐ')

    def test_missing_column(self):
        path = self.write_csv('English,Syriac\nfather,ܐܰܒ݂ܳܐ\n')
        with self.assertRaises(DataLoadFailure):
            CsvVocabularySource(path).load()

    def test_missing_file(self):
        with self.assertRaises(DataLoadFailure):
            CsvVocabularySource(os.path.join(self.tmpdir.name, 'nope.csv')).load()

    def test_map_columns(self):
        mapping = map_columns(['English', 'VocalizedForm', 'UnvocalizedForm', 'PartOfSpeech',
                               'TopicCategory', 'Frequency', 'Notes'])
        self.assertEqual(mapping['VocalizedForm'], 'vocalized')
        self.assertEqual(mapping['TopicCategory'], 'topic')
        self.assertNotIn('Notes', mapping)


class TestServerAPI(unittest.TestCase):
    """Tests for the FastAPI endpoints, backed by the built-in vocabulary."""

    def setUp(self):
        self.env = mock.patch.dict(os.environ)
        self.env.start()
        os.environ.pop('VOCAB_CSV', None)
        self.client = TestClient(app)
        self.client.__enter__()

    def tearDown(self):
        self.client.__exit__(None, None, None)
        self.env.stop()

    def start_round(self, user_id, **overrides):
        payload = {
            'user_id': user_id,
            'game_type': 'balloon',
            'selection_mode': 'theme',
            'topic_or_pos': 'body-parts',
        }
        payload.update(overrides)
        return self.client.post('/api/rounds', json=payload)

    def correct_entity(self, state):
        gloss = PROMPT_TO_GLOSS[state['question']['prompt']]
        return next(e for e in state['entities'] if e['label'] == gloss)

    def test_health(self):
        response = self.client.get('/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['status'], 'ok')
        self.assertEqual(response.json()['records'], len(SEED_ROWS))

    def test_vocabulary(self):
        data = self.client.get('/api/vocabulary').json()
        self.assertIn('body-parts', data['topics'])
        self.assertIn('verb', data['parts_of_speech'])
        self.assertEqual(sorted(data['game_types']), ['balloon', 'falling', 'matching', 'vocalizing-homograph'])

    def test_start_round(self):
        response = self.start_round('start-user')
        self.assertEqual(response.status_code, 200)
        state = response.json()
        self.assertEqual(state['state'], 'running')
        self.assertEqual(len(state['question']['options']), 5)
        self.assertEqual(len(state['entities']), 5)
        self.assertEqual(state['score'], 0)

    def test_select_correct(self):
        state = self.start_round('select-user').json()
        entity = self.correct_entity(state)
        response = self.client.post('/api/rounds/select', json={
            'user_id': 'select-user',
            'entity_id': entity['id'],
            'question_id': state['question']['id'],
        })
        data = response.json()
        self.assertEqual(data['outcome'], 'correct')
        self.assertEqual(data['round']['score'], 10)

    def test_unmatched_answer(self):
        state = self.start_round('answer-user').json()
        response = self.client.post('/api/rounds/answer', json={
            'user_id': 'answer-user', 'text': 'zebra', 'question_id': state['question']['id']
        })
        self.assertEqual(response.json()['outcome'], 'unmatched')
        self.assertEqual(response.json()['round']['score'], 0)

    def test_empty_pool(self):
        response = self.start_round('empty-user', topic_or_pos='astronomy')
        self.assertEqual(response.status_code, 422)
        self.assertIn('Empty pool', response.json()['detail'])

    def test_review_without_misses(self):
        response = self.start_round('review-user', selection_mode='review', topic_or_pos=None)
        self.assertEqual(response.status_code, 422)

    def test_invalid_configuration(self):
        self.assertEqual(self.start_round('bad-user', game_type='tetris').status_code, 422)
        self.assertEqual(self.start_round('bad-user', topic_or_pos=None).status_code, 422)
        self.assertEqual(self.start_round('bad-user', frequency_min=500, frequency_max=10).status_code, 422)

    def test_unknown_user(self):
        response = self.client.get('/api/rounds/current', params={'user_id': 'nobody'})
        self.assertEqual(response.status_code, 404)

    def test_restart_and_stop(self):
        first = self.start_round('restart-user').json()
        restarted = self.client.post('/api/rounds/restart', json={'user_id': 'restart-user'}).json()
        self.assertEqual(restarted['state'], 'running')
        self.assertGreater(restarted['generation'], first['generation'])

        stopped = self.client.post('/api/rounds/stop', json={'user_id': 'restart-user'}).json()
        self.assertEqual(stopped['state'], 'stopped')
        self.assertEqual(stopped['entities'], [])

    def test_finished_round_reaches_session(self):
        user = 'session-user'
        state = self.start_round(user, question_count=1).json()
        self.client.post('/api/rounds/select', json={
            'user_id': user, 'entity_id': self.correct_entity(state)['id']
        })
        deadline = time.time() + 3
        while time.time() < deadline:
            state = self.client.get('/api/rounds/current', params={'user_id': user}).json()
            if state['state'] == 'finished':
                break
            time.sleep(0.05)
        self.assertEqual(state['state'], 'finished')
        self.assertEqual(state['result']['final_score'], 10)
        self.assertEqual(state['result']['reason'], 'exhausted')

        session = self.client.get('/api/session', params={'user_id': user}).json()
        self.assertEqual(session['total_score'], 10)
        self.assertEqual(session['rounds_played'], 1)

        cleared = self.client.delete('/api/session', params={'user_id': user}).json()
        self.assertEqual(cleared['total_score'], 0)


class TestServerWithoutVocabulary(unittest.TestCase):
    """Startup with an unreadable vocabulary file."""

    def test_rounds_unavailable(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            missing = os.path.join(tmpdir, 'missing.csv')
            with mock.patch.dict(os.environ, {'VOCAB_CSV': missing}):
                with TestClient(app) as client:
                    health = client.get('/').json()
                    self.assertEqual(health['status'], 'unavailable')
                    self.assertIn('not found', health['error'])
                    response = client.post('/api/rounds', json={'user_id': 'x'})
                    self.assertEqual(response.status_code, 503)


class FlakySource(VocabularySource):
    """Fails the first `failures` loads, then serves the seed table."""

    def __init__(self, failures):
        self.failures = failures
        self.calls = 0

    def load(self) -> list:
        self.calls += 1
        if self.calls <= self.failures:
            raise DataLoadFailure(f"load {self.calls} failed")
        return StaticVocabularySource().load()

    def describe(self) -> str:
        return 'flaky'


class TestLoadVocabulary(unittest.IsolatedAsyncioTestCase):
    """Startup loading retries once."""

    async def test_first_load_succeeds(self):
        source = FlakySource(failures=0)
        records = await load_vocabulary(source)
        self.assertEqual(len(records), len(SEED_ROWS))
        self.assertEqual(source.calls, 1)

    async def test_retries_once_after_failure(self):
        source = FlakySource(failures=1)
        records = await load_vocabulary(source)
        self.assertEqual(len(records), len(SEED_ROWS))
        self.assertEqual(source.calls, 2)

    async def test_gives_up_after_second_failure(self):
        source = FlakySource(failures=5)
        with self.assertRaises(DataLoadFailure):
            await load_vocabulary(source)
        self.assertEqual(source.calls, 2)


if __name__ == '__main__':
    unittest.main()
