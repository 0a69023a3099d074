from locust import HttpUser, task, between
import random


class ApiUser(HttpUser):
    wait_time = between(0.1, 0.5)

    def on_start(self):
        # Each simulated client gets a token and a user of its own
        r = self.client.post("/auth/token", json={"role": "user"})
        self.headers = {"Authorization": f"Bearer {r.json()['token']}"} if r.status_code == 200 else {}
        uname = f"user_{random.randint(1, 1_000_000)}"
        r = self.client.post("/users", json={"name": uname}, headers=self.headers)
        if r.status_code == 200:
            self.user_id = r.json()["id"]
        else:
            self.user_id = None

    @task(3)
    def create_order(self):
        if not getattr(self, "user_id", None):
            return
        order = {
            "item": random.choice(["Laptop", "Phone", "Headphones"]),
            "amount": random.randint(100, 150_000),
            "payment_method": random.choice(["Card", "Cash"]),
            "status": "Paid",
        }
        self.client.post(f"/users/{self.user_id}/orders", json=order, headers=self.headers,
                         name="/users/[id]/orders")

    @task(2)
    def list_orders(self):
        if not getattr(self, "user_id", None):
            return
        self.client.get(f"/users/{self.user_id}/orders", headers=self.headers, name="/users/[id]/orders")

    @task(1)
    def list_users(self):
        self.client.get("/users", headers=self.headers)

    @task(1)
    def company_info(self):
        self.client.get("/company-info")
