"""Hello World — the simplest wicket app.

Demonstrates literal and wildcard routes, path parameters, Response
chaining, redirects, and template rendering.

Run:
    python app.py
"""

from pathlib import Path

from wicket import App, AppConfig

HERE = Path(__file__).parent

app = App(AppConfig(static_dir=None, template_dir=HERE / "templates"))


def index(request, response):
    response.send("Hello, World!")


def greet(request, response):
    response.set_content_type("text/plain").send(f"Hello, {request.param('name')}!")


def status(request, response):
    response.json({"status": "ok", "version": "0.1.0"})


def custom(request, response):
    response.set_status(201).set_header("X-Custom", "wicket").send("Created")


def page(request, response):
    response.render("page.html", title=request.query.get("title", "Home"))


def old_home(request, response):
    response.redirect("/")


app.route("/").get(index)
app.route("/greet").get(greet, ["name"], "/greet/*")
app.route("/api/status").get(status)
app.route("/custom").get(custom)
app.route("/page").get(page)
app.route("/home").get(old_home)


if __name__ == "__main__":
    app.run()
