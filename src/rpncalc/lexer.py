from functools import reduce
import operator

import regex


class Lexer:
    '''
    Lexer for the calculator's *regular* token grammar.

    Tokens are runs of anything but space, tab, newline and carriage return.
    A bare ? or q is special; everything else is a word for the machine to
    look up as an operator or read as a number.

    For consistency, needs to be instantiated, despite holding no internal
    state.
    '''
    # Lookahead for the end of a token, without consuming it.
    END = r'''
           (?=
               [\x20\t\n\r]
               |
               \Z
           )
           '''
    HELP = r'\?' + END
    QUIT = r'q' + END
    WORD = r'[^\x20\t\n\r]+'
    SPACE = r'[\x20\t\n\r]+'

    # All possible lexemes. Order matters: ? and q only when bare.
    LEXEME = r'(?<help>' + HELP + r')|' \
             r'(?<quit>' + QUIT + r')|' \
             r'(?<word>' + WORD + r')|' \
             r'(?<space>' + SPACE + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.DOTALL,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def lex(self, line):
        '''
        Take a line and yield all lexemes, whitespace included.
        '''
        while line:
            match = regex.match(type(self).LEXEME, line,
                                flags=type(self).FLAGS)
            yield match
            line = line[len(match.group(0)):]

    def isfeedable(self, match):
        '''
        Return True if lexeme can be fed to machine.
        '''
        return 'space' not in self.matchedgroups(match).keys()

    def matchedgroups(self, match):
        '''
        Return the lexeme's kind mapped to its text.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}
