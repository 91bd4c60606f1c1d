import os

from shadenbt.conf import UNITTESTS_SETTINGS_FILEPATH
from shadenbt.log import LoggingOutput, setup_logging

os.environ['SHADENBT_CONFIG_YAML'] = os.environ.get('SHADENBT_TEST_CONFIG_YAML', UNITTESTS_SETTINGS_FILEPATH)

setup_logging(logging_output=LoggingOutput.PRETTY, debug=False)
