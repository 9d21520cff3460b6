from dotenv import load_dotenv
import os

load_dotenv()

SETTINGS_FILE = '.gotweet-server'


class Config:
    PORT = os.getenv('PORT') or '4000'
    HOST = os.getenv('HOST', '0.0.0.0')

    # Where resolved tokens are flushed so secrets can leave the environment
    TOKENS_PATH = os.getenv('GOTWEET_SETTINGS') or os.path.join(os.path.expanduser('~'), SETTINGS_FILE)

    DRY_RUN = os.getenv('DRY_RUN', 'false').lower() in ('1','true','yes')
    WAIT_ON_RATE_LIMIT = os.getenv('WAIT_ON_RATE_LIMIT', 'false').lower() in ('1','true','yes')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')
