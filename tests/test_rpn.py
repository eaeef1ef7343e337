"""Tests for the rpn command-line front end."""

import unittest
from io import StringIO
from unittest.mock import patch

import rpn
import rpnlib


class TestOneShot(unittest.TestCase):

    def run_main(self, *argv):
        with patch('sys.stdout', new_callable=StringIO) as out, \
             patch('rpn.stderr') as err:
            status = rpn.main(list(argv))
        return status, out.getvalue(), err

    def test_expression(self):
        status, out, err = self.run_main('2+3*4')
        self.assertEqual(status, 0)
        self.assertEqual(out, '2 3 4 * +\n')
        err.assert_not_called()

    def test_assignment_with_spaces(self):
        status, out, err = self.run_main('x = (1 + 2) * 3')
        self.assertEqual(status, 0)
        self.assertEqual(out, 'x = 1 2 + 3 *\n')
        err.assert_not_called()

    def test_several_expressions(self):
        status, out, err = self.run_main('a-b', 'sin(x,y)')
        self.assertEqual(out, 'a b -\nx y sin\n')

    def test_error(self):
        status, out, err = self.run_main('(1+2', '1+1')
        self.assertEqual(status, 1)
        self.assertEqual(out, '1 1 +\n')
        (label, ex), kwargs = err.call_args
        self.assertEqual(label, 'error:')
        self.assertIsInstance(ex, rpnlib.UnmatchedOpenError)

    def test_verbose_logs_infix_tokens(self):
        with self.assertLogs('rpn', level='DEBUG') as logs:
            self.run_main('-v', '1+2')
        self.assertIn("infix tokens: [Literal('1'), Op(<Operator.ADD: '+'>), "
                      "Literal('2')]", logs.output[0])

    def test_verbose_tokenizes_once(self):
        with patch('rpnlib.tokenize', wraps=rpnlib.tokenize) as tokenize, \
             self.assertLogs('rpn', level='DEBUG'):
            status, out, err = self.run_main('-v', 'x=sin(y)')
        tokenize.assert_called_once_with('x=sin(y)')
        self.assertEqual(out, 'x = y sin\n')


class TestRepl(unittest.TestCase):

    def run_repl(self, lines, *argv):
        with patch('builtins.input', side_effect=lines) as prompt, \
             patch('sys.stdout', new_callable=StringIO) as out, \
             patch('rpn.stderr') as err:
            status = rpn.main(list(argv))
        return status, out.getvalue(), err, prompt

    def test_quit(self):
        status, out, err, prompt = self.run_repl(['2^3^4', '', '  ', 'QUIT'])
        self.assertEqual(status, 0)
        self.assertEqual(out, '2 3 4 ^ ^\n')
        prompt.assert_called_with(rpn.PROMPT)
        err.assert_any_call(rpn.BANNER)
        err.assert_called_with('Exiting...')

    def test_quiet_skips_banner(self):
        status, out, err, prompt = self.run_repl(['quit'], '-q')
        err.assert_called_once_with('Exiting...')

    def test_errors_do_not_stop_the_loop(self):
        status, out, err, prompt = self.run_repl(['sine(x)', 'y = 2', 'quit'], '-q')
        self.assertEqual(out, 'y = 2\n')
        (label, ex), kwargs = err.call_args_list[0]
        self.assertIsInstance(ex, rpnlib.UnknownTokenError)

    def test_eof(self):
        status, out, err, prompt = self.run_repl(['1*2', EOFError], '-q')
        self.assertEqual(status, 0)
        self.assertEqual(out, '1 2 *\n')
        err.assert_called_with('\ncaught EOF')

    def test_interrupt(self):
        status, out, err, prompt = self.run_repl([KeyboardInterrupt], '-q')
        err.assert_called_with('\ninterrupted')


if __name__ == '__main__':
    unittest.main()
