"""
WSGI entry point.

Run with:
    python -m orderdesk.wsgi

Or behind gunicorn:
    gunicorn orderdesk.wsgi:app
"""

from orderdesk import create_app

app = create_app()


if __name__ == '__main__':
    port = app.config.get('PORT', 5000)
    print("\n" + "=" * 60)
    print(app.config.get('BRAND_NAME', 'OrderDesk'))
    print("=" * 60)
    print(f"Dashboard:       http://localhost:{port}/admin")
    print(f"Admin Login:     http://localhost:{port}/admin/login")
    print(f"Orders API:      http://localhost:{port}/api/orders")
    print(f"Health:          http://localhost:{port}/health")
    print("=" * 60 + "\n")

    app.run(host='0.0.0.0', port=port, debug=False)
