# passenger_wsgi.py - cPanel/Passenger looks for `application` in this file
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from question_bank.wsgi import application  # noqa: E402,F401
