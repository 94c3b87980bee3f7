import io
import json
import os
import tempfile
import unittest
from contextlib import redirect_stdout
from pathlib import Path
from unittest.mock import MagicMock, patch

from esv_callout.cli import main


class TestCli(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.root = Path(self.tmp.name)
        self.settings = self.root / 'settings.json'
        env = patch.dict(os.environ, {}, clear=False)
        env.start()
        self.addCleanup(env.stop)
        os.environ.pop('ESV_API_KEY', None)

    def run_cli(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main(['--settings', str(self.settings), *argv])
        return code, out.getvalue()

    def test_settings_set_and_show(self):
        code, out = self.run_cli('settings', '--set', 'api_key= abcdef123456 ',
                                 '--set', 'use_callout=no')
        self.assertEqual(code, 0)
        shown = json.loads(out)
        self.assertEqual(shown['api_key'], '********3456')
        self.assertFalse(shown['use_callout'])
        self.assertEqual(json.loads(self.settings.read_text())['api_key'], 'abcdef123456')

    def test_settings_invalid_value(self):
        code, _ = self.run_cli('settings', '--set', 'use_callout=sometimes')
        self.assertEqual(code, 1)
        self.assertFalse(self.settings.exists())

    def test_fetch_without_key_fails(self):
        note = self.root / 'Psalm 23.md'
        note.write_text('')
        code, out = self.run_cli('fetch', str(note))
        self.assertEqual(code, 1)
        self.assertIn('No API Set', out)
        self.assertEqual(note.read_text(), '')

    def test_fetch_inserts_passage(self):
        self.settings.write_text(json.dumps({'api_key': 'key'}))
        note = self.root / 'Psalm 23.md'
        note.write_text('# Psalm 23\n')
        response = MagicMock(status_code=200)
        response.json.return_value = {'passages': ['Psalm 23 (ESV)\n\nThe LORD is my shepherd']}

        with patch('esv_callout.client.session') as session:
            session.get.return_value = response
            code, out = self.run_cli('fetch', str(note), '--line', '1')

        self.assertEqual(code, 0)
        self.assertIn('Passage added to Psalm 23', out)
        self.assertEqual(note.read_text(),
                         '# Psalm 23\n> [!example]+ Psalm 23 (ESV)\n> \n> The LORD is my shepherd')

    def test_fetch_into_undecodable_note_is_reported(self):
        self.settings.write_text(json.dumps({'api_key': 'key'}))
        note = self.root / 'John 1.md'
        note.write_bytes(b'caf\xe9\n')
        response = MagicMock(status_code=200)
        response.json.return_value = {'passages': ['John 1 (ESV)\n\nIn the beginning was the Word']}

        with patch('esv_callout.client.session') as session:
            session.get.return_value = response
            code, out = self.run_cli('fetch', str(note))

        self.assertEqual(code, 1)
        self.assertIn('Could not update note', out)
        self.assertEqual(note.read_bytes(), b'caf\xe9\n')

    def test_fetch_with_malformed_settings_is_reported(self):
        self.settings.write_text('{not json')
        note = self.root / 'John 1.md'
        note.write_text('')
        code, out = self.run_cli('fetch', str(note))
        self.assertEqual(code, 1)
        self.assertIn('Could not read settings', out)


if __name__ == '__main__':
    unittest.main()
