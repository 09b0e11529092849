from os import path
import logging
import sys
from argparse import ArgumentParser, ArgumentTypeError, REMAINDER, OPTIONAL

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory
import regex

from .util import CalcError, ParseIntError, InvalidInputFormat, EvalError
from .converter import Converter
from .lexer import Lexer
from .parser import Parser
from .machine import Machine


logger = logging.getLogger(__name__)
# What argparse itself reads as a negative number, not an option.
NEGATIVE_NUMBER = r'-\d+|-\d*\.\d+'


def _passes(value):
    '''
    Non-negative int, for --max-passes.
    '''
    passes = int(value)
    if passes < 0:
        raise ArgumentTypeError('must not be negative')
    return passes


class InteractiveInput:
    def __init__(self, prompt, history=None):
        self.prompt = prompt
        self.history = history

    def __iter__(self):
        history = None
        if self.history is not None:
            history = FileHistory(path.expanduser(self.history))
        try:
            session = PromptSession(message=self.prompt,
                                    history=history,
                                    enable_suspend=True,
                                    prompt_continuation=' ' * len(self.prompt),
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator and literal converter.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.basecalc_history'

    def calculate(self, line):
        '''
        Lex, reorder and evaluate one infix expression.

        :raises CalcError: If the expression can't be evaluated.
        '''
        return self.machine.evaluate(
            self.parser.postfix(self.lexer.lex(line)))

    def executor(self):
        '''
        Evaluate each expression, printing its result or error.
        '''
        for line in self.args.expressions:
            try:
                print(self.calculate(line), file=self.stdout)
            # Report, and carry on with the next expression
            except CalcError as e:
                print(e.args[0], file=self.stdout)

    def batch(self):
        '''
        Convert each literal argument, in a forced base if one was given.
        '''
        values = list(self.args.values)
        base = self._forced_base(values)
        if base is not None:
            values.remove('=' + base)
        logger.debug('Converting %d value(s), forced base %s',
                     len(values), base)
        for value in values:
            try:
                result = self.converter.convert(value)
            except ParseIntError:
                print('Error: Failed to parse input', file=self.stdout)
                continue
            except InvalidInputFormat:
                print('Error: Invalid input format', file=self.stdout)
                continue
            if base is None:
                print(result, file=self.stdout)
                continue
            try:
                n = self.converter.normalize(result)
            except EvalError:
                print('Failed to convert expression result', file=self.stdout)
                continue
            print(self.converter.format(n, base), file=self.stdout)

    def dumper(self):
        '''
        Dump tokens and postfix form of each expression.
        '''
        print('<tokens>\t<postfix>', file=self.stdout)
        for line in self.args.expressions:
            tokens = list(self.lexer.lex(line))
            print(' '.join(map(str, tokens)),
                  ' '.join(map(str, self.parser.postfix(tokens))),
                  sep='\t',
                  file=self.stdout)

    def raw_grammar(self):
        '''
        Print literal grammar rules, in the order they're tried.
        '''
        print(self.converter.grammar(), file=self.stdout)

    def _forced_base(self, values):
        '''
        Return base of first =<base> argument, if any.
        '''
        for value in values:
            if value.startswith('=') and value[1:] in Converter.BASES:
                return value[1:]
        return None

    def _prompting_input(self):
        '''
        Return prompting input if either:
        - prompt explicitly specified.
        - both input and output are a tty

        Otherwise the input handle itself.
        '''
        if self.args.prompt or \
           self.stdin.isatty() and self.stdout.isatty():
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history=self.HISTORY_FILE)
        else:
            return self.stdin

    def __init__(self, stdin=None, stdout=None):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.

        :param stdin: Where expressions are read from; sys.stdin if not given.
        :param stdout: Where results go; sys.stdout if not given.
        '''
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout
        self.argument_parser = ArgumentParser(
            description='Calculator and numeric literal base converter',
            add_help=False)
        actions = [
            self.argument_parser.add_argument('-h', '--help',
                                              action='help'),
            self.argument_parser.add_argument('-v', '--verbose',
                                              action='store_true'),
        ]
        actions.append(self.argument_parser.add_argument(
            '--max-passes',
            type=_passes,
            default=Converter.DEFAULT_MAX_PASSES,
            help='most conversions applied to reduce a literal to decimal'))
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        actions.append(int_nonint_groups.add_argument('-e', '--expression',
                                                      nargs=REMAINDER,
                                                      dest='expressions'))
        actions.append(int_nonint_groups.add_argument('-p', '--prompt',
                                                      nargs=OPTIONAL,
                                                      const=self.DEFAULT_PROMPT))
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            actions.append(main_groups.add_argument(short_, long_,
                                                    action='store_const',
                                                    const=action,
                                                    dest='action'))
        self.argument_parser.add_argument(
            'values',
            nargs='*',
            metavar='VALUE',
            help='literals to convert; =f, =2, =8, =10 or =16 forces the '
                 'output base')
        self.argument_parser.set_defaults(action=None)
        # Short option letters, -h included
        self.shorts = {option_string[1]
                       for action in actions
                       for option_string in action.option_strings
                       if not option_string.startswith('--')}

    def _shield_literals(self, args):
        '''
        Replace literals argparse would take for options (-101b, -2f) with
        placeholders.

        Return the new args, and the literal behind each placeholder.
        Arguments after -e are left alone; REMAINDER takes them as they are.
        '''
        shielded = []
        literals = {}
        for i, arg in enumerate(args):
            if arg in {'-e', '--expression'} or arg == '--':
                shielded.extend(args[i:])
                break
            if len(arg) > 1 and arg.startswith('-') and \
               not arg.startswith('--') and arg[1] not in self.shorts and \
               not regex.fullmatch(NEGATIVE_NUMBER, arg):
                placeholder = '\0{}'.format(len(literals))
                literals[placeholder] = arg
                arg = placeholder
            shielded.append(arg)
        return shielded, literals

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or the process' command line arguments.
        '''
        if args is None:
            args = sys.argv[1:]
        args, literals = self._shield_literals(list(args))
        self.args = self.argument_parser.parse_args(args)
        self.args.values = [literals.get(value, value)
                            for value in self.args.values]
        logging.basicConfig(
            level=logging.DEBUG if self.args.verbose else logging.WARNING,
            format='%(name)s: %(levelname)s: %(message)s')
        self.converter = Converter(max_passes=self.args.max_passes)
        self.lexer = Lexer(self.converter, out=self.stdout)
        self.parser = Parser()
        self.machine = Machine(self.converter)
        action = self.args.action
        if action is None:
            if self.args.values and self.args.expressions is None:
                action = self.batch
            else:
                action = self.executor
        if self.args.expressions is None:
            self.args.expressions = self._prompting_input()
        logger.debug('Running %s', action.__name__)
        try:
            action()
        except KeyboardInterrupt:
            sys.exit(1)


def main():
    CLI().run()
