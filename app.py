"""
Portfolio entry point

`flask --app app run` or `python app.py` for the development server.
PORT and FLASK_DEBUG come from the environment (or .env).
"""

import os

from portfolio import create_app

app = create_app()

if __name__ == '__main__':
    port = int(os.environ.get('PORT', 5000))
    debug = os.environ.get('FLASK_DEBUG', '1') not in ('0', 'false', 'False')
    app.run(debug=debug, host='0.0.0.0', port=port)
