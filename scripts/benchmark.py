"""HTTP benchmark for the GraphQL endpoint."""
import asyncio
import argparse
import time
import statistics
import httpx

BASE_URL = "http://localhost:4000"

OPERATIONS = [
    ("users(first: 50)", "{ users(first: 50) { id name } }"),
    ("posts(first: 50)", "{ posts(first: 50) { id content } }"),
    ("posts + comments", "{ posts(first: 20) { id comments { id content } } }"),
    ("users + posts + comments", "{ users(first: 10) { id posts { id comments { id } } } }"),
    ("postById + authors", '{ postById(id: "1") { id comments { author { name } } } }'),
    ("counts", "{ countUsers countPosts }"),
]


async def benchmark_operation(
    client: httpx.AsyncClient, name: str, query: str, iterations: int = 50, token: str | None = None
):
    times = []
    query_counts = []
    errors = 0
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    payload = {"query": query}

    # Warmup
    for _ in range(3):
        try:
            await client.post(f"{BASE_URL}/graphql", json=payload, headers=headers)
        except httpx.HTTPError:
            pass

    for _ in range(iterations):
        try:
            start = time.perf_counter()
            resp = await client.post(f"{BASE_URL}/graphql", json=payload, headers=headers)
            elapsed = (time.perf_counter() - start) * 1000

            if resp.status_code == 200 and not resp.json().get("errors"):
                times.append(elapsed)
                qc = resp.headers.get("X-Query-Count")
                if qc is not None:
                    query_counts.append(int(qc))
            else:
                errors += 1
        except httpx.HTTPError:
            errors += 1

    if not times:
        return {"name": name, "error": f"All {iterations} requests failed"}

    ordered = sorted(times)
    return {
        "name": name,
        "avg_ms": round(statistics.mean(times), 2),
        "p50_ms": round(ordered[len(ordered) // 2], 2),
        "p95_ms": round(ordered[int(len(ordered) * 0.95)], 2),
        "p99_ms": round(ordered[int(len(ordered) * 0.99)], 2),
        "queries": round(statistics.mean(query_counts), 1) if query_counts else "N/A",
        "errors": errors,
    }


async def login(client: httpx.AsyncClient, email: str, password: str) -> str | None:
    mutation = """
        mutation Login($email: String!, $password: String!) {
          login(email: $email, password: $password) { token }
        }
    """
    resp = await client.post(
        f"{BASE_URL}/graphql",
        json={"query": mutation, "variables": {"email": email, "password": password}},
    )
    data = resp.json().get("data") or {}
    return (data.get("login") or {}).get("token")


async def run_benchmark(iterations: int = 50, email: str | None = None, password: str | None = None):
    print("=" * 80)
    print(f"Blog GraphQL Benchmark — {iterations} iterations per operation")
    print(f"Target: {BASE_URL}/graphql")
    print("=" * 80)

    async with httpx.AsyncClient() as client:
        try:
            resp = await client.get(f"{BASE_URL}/health")
            if resp.status_code != 200:
                print(f"ERROR: Health check failed ({resp.status_code})")
                return
            print(f"Health: {resp.json()}")
        except httpx.HTTPError as e:
            print(f"ERROR: Cannot connect to {BASE_URL} — {e}")
            return

        token = None
        if email and password:
            token = await login(client, email, password)
            print(f"Authenticated as {email}: {'yes' if token else 'NO'}")

        print()
        print(f"{'Operation':<40} {'Avg':>8} {'P50':>8} {'P95':>8} {'P99':>8} {'Queries':>8} {'Err':>4}")
        print("-" * 80)

        for name, query in OPERATIONS:
            result = await benchmark_operation(client, name, query, iterations, token)
            if "error" in result:
                print(f"{result['name']:<40} {'ERROR':>8}")
            else:
                print(
                    f"{result['name']:<40} "
                    f"{result['avg_ms']:>7.1f}ms "
                    f"{result['p50_ms']:>7.1f}ms "
                    f"{result['p95_ms']:>7.1f}ms "
                    f"{result['p99_ms']:>7.1f}ms "
                    f"{str(result['queries']):>8} "
                    f"{result['errors']:>4}"
                )

        print("-" * 80)
        print("\nBenchmark complete.")


def main():
    global BASE_URL

    parser = argparse.ArgumentParser(description="Benchmark the blog GraphQL API")
    parser.add_argument("-n", "--iterations", type=int, default=50, help="Iterations per operation")
    parser.add_argument("--base-url", default=BASE_URL, help="API base URL")
    parser.add_argument("--email", help="Log in as this user before benchmarking")
    parser.add_argument("--password", help="Password for --email")
    args = parser.parse_args()

    BASE_URL = args.base_url
    asyncio.run(run_benchmark(args.iterations, args.email, args.password))


if __name__ == "__main__":
    main()
