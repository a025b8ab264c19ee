"""Users — a small JSON resource on one route table.

Demonstrates attaching a ``Resource`` bundle, several wildcards bound to
names, first-match ordering, and the failure page.

Run:
    python app.py
"""

from wicket import App, AppConfig, Resource

app = App(AppConfig(static_dir=None))

USERS: dict[str, dict[str, str]] = {"1": {"id": "1", "name": "Ada"}}


class Users(Resource):
    def get(self, request, response):
        user = USERS.get(request.param("id"))
        if user is None:
            response.set_status(404).json({"error": "no such user"})
            return
        response.json(user)

    def put(self, request, response):
        user_id = request.param("id")
        USERS[user_id] = {"id": user_id, "name": request.json()["name"]}
        response.json(USERS[user_id])


def list_users(request, response):
    response.json(sorted(USERS.values(), key=lambda u: u["id"]))


def user_post(request, response):
    response.json(request.path_params)


def crash(request, response):
    raise RuntimeError("users database unavailable")


table = app.route("/users")
table.get(user_post, ["id", "post"], "/users/*/posts/*")
table.attach(Users(), ["id"], "/users/*")
table.get(list_users)
app.route("/crash").get(crash)


if __name__ == "__main__":
    app.run()
