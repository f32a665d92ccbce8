
def indent(text, indentation='. '):
  """
  Indent a block of text
  """
  return '\n'.join(indentation + line for line in text.split('\n'))

def find(predicate, it):
  """
  Find an item in an iterable that matches a predicate
  """
  for x in it:
    if predicate(x):
      return x

def blen(string):
  """
  Return the number of bytes, which seems to be
  how Twitter counts length
  """
  return len(bytes(string, encoding='utf-8'))
