import os
from teamops import create_app

# FLASK_CONFIG picks one of the classes in config.py
app = create_app(os.environ.get('FLASK_CONFIG', 'default'))

if __name__ == '__main__':
    app.run(host=os.environ.get('HOST', '0.0.0.0'), port=int(os.environ.get('PORT', 5000)),
            debug=app.config.get('DEBUG', False))
