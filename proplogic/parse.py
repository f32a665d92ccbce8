from typing import *
import enum
import re

from proplogic.formula import Formula, FormulaKind
from proplogic.pretty import *


"""

Formulas are read in two steps. `tokenize` turns the text into
a list of Tokens; the parse_* functions below then consume that
list by recursive descent, each returning a tuple (formula, rest)
where `rest` is the remaining tokens.

Precedence, from tightest to loosest binding, is

  not  >  and  >  or  >  to

and `to` associates to the right. Chaining `and` or `or` without
parentheses is rejected instead of being given an associativity:

  (A and B) and C     fine
  A and B and C       ParseError (ambiguous)

Every connective can be spelled as a word, a TeX macro, or
a Unicode glyph (the way formulas are printed back out):

"""

NOT_spellings = ['not', tex_NOT, pretty_NOT, '~']
AND_spellings = ['and', tex_AND, pretty_AND, '&']
OR_spellings  = ['or',  tex_OR,  pretty_OR,  '|']
TO_spellings  = ['to',  tex_TO,  pretty_TO,  '->']


class TokenKind(enum.Enum):
  NOT   = 'not'
  AND   = 'and'
  OR    = 'or'
  TO    = 'to'
  OPEN  = 'open'
  CLOSE = 'close'
  ATOM  = 'atom'
  END   = 'end'


class Token:

  def __init__(self, kind: TokenKind, text: str, position: int):
    self.kind = kind
    self.text = text
    self.position = position

  def __eq__(self, other):
    return (type(self) == type(other)
      and self.kind == other.kind
      and self.text == other.text
      and self.position == other.position)

  def __repr__(self):
    return f'Token({self.kind.value}, {self.text!r}, {self.position})'


class ParseErrorKind(enum.Enum):
  EMPTY         = 'empty input'
  UNKNOWN_TOKEN = 'unknown token'
  UNBALANCED    = 'unbalanced parenthesis'
  AMBIGUOUS     = 'ambiguous chain'
  TRAILING      = 'trailing input'
  UNEXPECTED    = 'unexpected token'


class ParseError(ValueError):
  """
  Raised for input that is not a well-formed formula.
  `position` is the character offset of `fragment` in the input.
  """

  def __init__(self, kind: ParseErrorKind, position: int, fragment: str, message: str = None):
    self.kind = kind
    self.position = position
    self.fragment = fragment
    self.message = message or kind.value
    super().__init__(f"{self.message} at position {position}: '{fragment}'")


def _spelling_table():
  table = {}
  for kind, spellings in [
    (TokenKind.NOT, NOT_spellings),
    (TokenKind.AND, AND_spellings),
    (TokenKind.OR,  OR_spellings),
    (TokenKind.TO,  TO_spellings),
  ]:
    for spelling in spellings:
      table[spelling] = kind
  table[pretty_OPEN] = TokenKind.OPEN
  table[pretty_CLOSE] = TokenKind.CLOSE
  return table

SPELLINGS = _spelling_table()

# deepest a formula may nest through parentheses, 'not' and 'to'
MAX_NESTING = 100

TOKEN_pattern = re.compile(r"""
    (?P<space>  \s+ )
  | (?P<macro>  \\[A-Za-z]+ )
  | (?P<word>   [A-Za-z_][A-Za-z0-9_']* )
  | (?P<symbol> -> | [()¬∧∨→~&|] )
""", re.VERBOSE)

def tokenize(text: str) -> List[Token]:
  """
  Split text into tokens. The returned list always ends with
  a single END token positioned just past the input.
  """

  tokens = []
  position = 0

  while position < len(text):
    match = TOKEN_pattern.match(text, position)
    if match is None:
      raise ParseError(ParseErrorKind.UNKNOWN_TOKEN, position, text[position])

    group = match.lastgroup
    lexeme = match.group()

    if group == 'word':
      kind = SPELLINGS.get(lexeme.lower(), TokenKind.ATOM)
    elif group == 'macro':
      kind = SPELLINGS.get(lexeme.lower())
      if kind is None:
        raise ParseError(ParseErrorKind.UNKNOWN_TOKEN, position, lexeme)
    elif group == 'symbol':
      kind = SPELLINGS[lexeme]
    else:
      kind = None

    if kind is not None:
      tokens.append(Token(kind, lexeme, position))
    position = match.end()

  tokens.append(Token(TokenKind.END, '', len(text)))
  return tokens

def parse(text: str) -> Formula:
  """
  Parse a formula, returning a Formula object.
  Raises ParseError on malformed or ambiguous input.
  """

  tokens = tokenize(text)
  if tokens[0].kind == TokenKind.END:
    raise ParseError(ParseErrorKind.EMPTY, 0, text)

  node, rest = parse_impl(tokens, 0)

  leftover = rest[0]
  if leftover.kind == TokenKind.CLOSE:
    raise ParseError(ParseErrorKind.UNBALANCED, leftover.position, leftover.text,
      'unmatched closing parenthesis')
  if leftover.kind != TokenKind.END:
    raise ParseError(ParseErrorKind.TRAILING, leftover.position, text[leftover.position:])
  return node

def check_nesting(token, depth):
  if depth > MAX_NESTING:
    raise ParseError(ParseErrorKind.UNEXPECTED, token.position, token.text,
      'nesting too deep')

def parse_impl(rest, depth):
  """
  impl := disj ('to' impl)?
  """

  left, rest = parse_disj(rest, depth)

  if rest[0].kind != TokenKind.TO:
    return left, rest

  check_nesting(rest[0], depth + 1)
  right, rest = parse_impl(rest[1:], depth + 1)
  node = Formula(FormulaKind.TO, left, right)
  return (node, rest)

def parse_disj(rest, depth):
  """
  disj := conj ('or' conj)?
  """
  return parse_chain(rest, depth, TokenKind.OR, FormulaKind.OR, parse_conj)

def parse_conj(rest, depth):
  """
  conj := neg ('and' neg)?
  """
  return parse_chain(rest, depth, TokenKind.AND, FormulaKind.AND, parse_neg)

def parse_chain(rest, depth, token_kind, formula_kind, parse_operand):
  # shared by 'and' and 'or', which only ever take two operands
  # unless parenthesised

  left, rest = parse_operand(rest, depth)

  if rest[0].kind != token_kind:
    return left, rest

  right, rest = parse_operand(rest[1:], depth)

  if rest[0].kind == token_kind:
    token = rest[0]
    raise ParseError(ParseErrorKind.AMBIGUOUS, token.position, token.text,
      f"repeated '{token_kind.value}' needs parentheses")

  node = Formula(formula_kind, left, right)
  return (node, rest)

def parse_neg(rest, depth):
  """
  neg := 'not' neg | atom | '(' impl ')'
  """

  token = rest[0]

  if token.kind == TokenKind.NOT:
    check_nesting(token, depth + 1)
    child, rest = parse_neg(rest[1:], depth + 1)
    node = Formula(FormulaKind.NOT, child)
    return (node, rest)

  elif token.kind == TokenKind.OPEN:
    check_nesting(token, depth + 1)
    node, rest = parse_impl(rest[1:], depth + 1)
    if rest[0].kind == TokenKind.END:
      raise ParseError(ParseErrorKind.UNBALANCED, token.position, token.text,
        'unclosed parenthesis')
    if rest[0].kind != TokenKind.CLOSE:
      raise ParseError(ParseErrorKind.UNEXPECTED, rest[0].position, rest[0].text,
        "expected ')'")
    return (node, rest[1:])

  elif token.kind == TokenKind.ATOM:
    node = Formula(FormulaKind.ATOM, token.text)
    return (node, rest[1:])

  elif token.kind == TokenKind.END:
    raise ParseError(ParseErrorKind.UNEXPECTED, token.position, token.text,
      'unexpected end of input')

  else:
    raise ParseError(ParseErrorKind.UNEXPECTED, token.position, token.text,
      'expected a formula')
