from collections import deque

from .lexer import Kind


class Parser:
    '''
    Shunting yard, infix tokens to postfix.

    Multiplicative operators bind tighter than additive ones; all associate
    left. No numeric knowledge; literals pass through untouched.
    '''
    PRECEDENCE = {
        Kind.PLUS: 1,
        Kind.MINUS: 1,
        Kind.STAR: 2,
        Kind.SLASH: 2,
    }

    def postfix(self, tokens):
        '''
        Return tokens reordered into postfix (RPN).

        Never fails. A ")" without a matching "(" flushes the operator stack
        and is dropped. A "(" never closed ends up in the output, where the
        machine rejects it.
        '''
        precedence = type(self).PRECEDENCE
        output = []
        operators = deque()
        for token in tokens:
            if token.kind is Kind.NUMBER:
                output.append(token)
            elif token.kind in precedence:
                # Stops at "(", which has no precedence.
                while operators and \
                      precedence.get(operators[-1].kind, 0) >= \
                      precedence[token.kind]:
                    output.append(operators.pop())
                operators.append(token)
            elif token.kind is Kind.LPAREN:
                operators.append(token)
            elif token.kind is Kind.RPAREN:
                while operators:
                    top = operators.pop()
                    if top.kind is Kind.LPAREN:
                        break
                    output.append(top)
        while operators:
            output.append(operators.pop())
        return output
