from dotenv import load_dotenv

from pantryfinder.app import configure_logging, create_app

load_dotenv()
configure_logging()
app = create_app()

if __name__ == '__main__':
    app.run(debug=False, host='0.0.0.0', port=app.config['PORT'])
