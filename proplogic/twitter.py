from typing import *
import argparse
import json
import logging
import os
import re
import time

import tweepy

from proplogic.main import respond
from proplogic.util import blen

logger = logging.getLogger(__name__)


CREDENTIAL_keys = [
  'consumer_key',
  'consumer_secret',
  'access_token',
  'access_token_secret',
]

def get_credentials(path='auth.json'):
  """
  Collect the API credentials. Environment variables such as
  TWITTER_CONSUMER_KEY win over the contents of auth.json; missing
  access tokens are obtained through the PIN flow. auth.json is only
  written when something had to be asked for.
  """

  if os.path.exists(path):
    with open(path, 'r') as f:
      creds = json.loads(f.read())
  else:
    creds = {}

  for key in CREDENTIAL_keys:
    value = os.environ.get('TWITTER_' + key.upper())
    if value:
      creds[key] = value

  prompted = False

  if 'consumer_key' not in creds:
    creds['consumer_key'] = input('Twitter API Consumer Key: ')
    prompted = True

  if 'consumer_secret' not in creds:
    creds['consumer_secret'] = input('Twitter API Consumer Secret: ')
    prompted = True

  if 'access_token' not in creds or 'access_token_secret' not in creds:
    auth = tweepy.OAuth1UserHandler(creds['consumer_key'], creds['consumer_secret'], callback='oob')
    print('Go here: ' + auth.get_authorization_url())
    verifier = input('Verifier Pin: ')
    creds['access_token'], creds['access_token_secret'] = auth.get_access_token(verifier)
    prompted = True

  if prompted:
    with open(path, 'w') as f:
      f.write(json.dumps(creds))

  return creds

def get_client(creds=None) -> tweepy.Client:
  if creds is None:
    creds = get_credentials()
  return tweepy.Client(**{key: creds[key] for key in CREDENTIAL_keys})

# == # == # ==

HANDLE_pattern = re.compile(r'^(\s*@\w+)+\s*')

def read_request(text: str) -> Tuple[str, bool]:
  """
  Pull the formula out of a mention such as

    @bot (A or B) to (B or A) tex

  Leading handles are dropped, and a final 'tex' asks for TeX output.
  """

  text = HANDLE_pattern.sub('', text).strip()
  words = text.rsplit(None, 1)
  if len(words) == 2 and words[1].lower() == 'tex':
    return words[0], True
  return text, False

def chunk_280(string):
  """
  Split a long string into chunks which are 280 bytes or less.
  Chunks will not split lines.
  If a line is over 280 bytes, an exception will be thrown.
  """

  lines = string.split('\n')

  if any(blen(line) > 280 for line in lines):
    raise ValueError('A line with length >280 was given')

  chunk = []
  while lines:
    while lines and blen('\n'.join(chunk + [lines[0]])) <= 280:
      chunk.append(lines.pop(0))
    yield '\n'.join(chunk)
    chunk = []

def long_reply_to_tweet(client, tweet_id, response):
  """
  Reply to a tweet, splitting it over several replies
  if it's longer than 280 bytes. Each chunk replies to
  the previous one, so the answer reads as a thread.
  """
  for chunk in chunk_280(response):
    reply = client.create_tweet(text=chunk, in_reply_to_tweet_id=tweet_id)
    tweet_id = reply.data['id']

def prove_tweet(client, tweet_id, tweet_text) -> bool:
  """
  For a tweet that contains a formula, try to prove it and reply
  with the proof, or with the reason there is none.
  Returns whether a proof was found.
  """

  formula, tex = read_request(tweet_text)
  logger.info('Got a new theorem to prove: %s', formula)

  ok, text = respond(formula, tex=tex)
  if ok:
    text = 'Proof:\n\n' + text.rstrip('\n')
  logger.info('%s', text if ok else 'failed to prove')

  try:
    long_reply_to_tweet(client, tweet_id, text)
  except ValueError:
    logger.warning('Reply to %s has a line over 280 bytes', tweet_id)
    long_reply_to_tweet(client, tweet_id, 'That proof is too wide to tweet.')
  return ok

def poll_mentions(client, user_id, since_id=None):
  """
  Answer every mention newer than `since_id`, oldest first,
  yielding the id of each mention once it has been answered.
  """

  response = client.get_users_mentions(user_id, since_id=since_id, max_results=100)
  tweets = response.data or []

  for tweet in sorted(tweets, key=lambda tweet: tweet.id):
    prove_tweet(client, tweet.id, tweet.text)
    yield tweet.id

def answer_mentions(client, user_id, since_id=None):
  """
  Run one round of polling. Returns the id to poll from next time,
  which covers every mention answered before any failure.
  """

  try:
    for since_id in poll_mentions(client, user_id, since_id):
      pass
  except tweepy.TweepyException:
    logger.exception('Polling mentions failed')
  return since_id

def listen(client, *, interval=60, prove_existing=False):
  user_id = client.get_me().data.id
  since_id = None

  if not prove_existing:
    latest = client.get_users_mentions(user_id, max_results=5).data
    if latest:
      since_id = max(tweet.id for tweet in latest)

  logger.info('Listening for mentions of %s...', user_id)

  while True:
    since_id = answer_mentions(client, user_id, since_id)
    time.sleep(interval)


if __name__ == '__main__':

  parser = argparse.ArgumentParser(description='Reply to mentions with proofs.')
  parser.add_argument('--prove-existing', action='store_true',
    help='also answer mentions made before the bot started')
  parser.add_argument('--interval', type=int, default=60,
    help='seconds between polls')
  args = parser.parse_args()

  logging.basicConfig(
    level = logging.INFO,
    format = '%(asctime)s %(levelname)s %(name)s: %(message)s',
    handlers = [logging.StreamHandler(), logging.FileHandler('log.log')],
  )

  try:
    listen(get_client(), interval=args.interval, prove_existing=args.prove_existing)
  except KeyboardInterrupt:
    pass
