#!/usr/bin/env python3
"""
Basic Agent Platform client usage example.

Runs the client against an in-process fake platform so no credentials are needed.
Run with: python examples/basic_usage.py
"""

import logging

import httpx

from agentplatform import AgentPlatformClient, AgentPlatformError, ConfigurationError
from agentplatform.adapters import chat_model, listing_model, parse_invoke_body
from agentplatform.logging import configure_logging
from agentplatform.testing import agent_payload, invoke_payload, listing_payload

print("=== Agent Platform Client Basic Usage Example ===\n")

configure_logging(level=logging.INFO)

# 1. Exception hierarchy
print("1. Testing exception classes...")
try:
    raise ConfigurationError("AGENT_PLATFORM_CLIENT_ID environment variable not set")
except AgentPlatformError as e:
    print(f"   Caught AgentPlatformError: {e}")
    print(f"   Code: {e.code}, Message: {e.message}")

print("\n   OK: Exception classes working\n")

# 2. Fake platform
token_requests = 0


def handler(request: httpx.Request) -> httpx.Response:
    global token_requests
    if request.url.path == "/connect/token":
        token_requests += 1
        return httpx.Response(200, json={"access_token": "demo-token", "expires_in": 900})
    if request.url.path.endswith("/invoke"):
        return httpx.Response(
            200,
            json=invoke_payload(
                "Refunds are accepted within 30 days.",
                [("node-1", "policy-doc", 0.92), ("node-2", None, 0.41)],
            ),
        )
    return httpx.Response(
        200,
        json=listing_payload(
            [
                agent_payload("rag-1", name="Policies"),
                agent_payload("chat-1", type="chat", name="Small talk"),
                agent_payload("rag-2", type="RAG", name="Handbook"),
            ],
            total_items=12,
            has_more=True,
        ),
    )


http_client = httpx.Client(transport=httpx.MockTransport(handler))

with AgentPlatformClient(
    client_id="demo-client",
    client_secret="demo-secret",
    oauth_base_url="https://idp.example.com",
    api_url="https://api.example.com",
    hx_env_id="demo-env",
    http_client=http_client,
) as client:
    # 3. Listing
    print("2. Listing RAG agents...")
    page = client.agents.list_rag_agents(offset=0, limit=3)
    for agent in page.agents:
        print(f"   {agent.agent_id}: {agent.name} ({agent.type})")
    print(f"   Pagination: {page.pagination}")
    model = listing_model(page)
    print(f"   Agents by type: {model['agentsByType']}")
    assert [agent.agent_id for agent in page.agents] == ["rag-1", "rag-2"]

    print("\n   OK: Listing working\n")

    # 4. Invocation
    print("3. Invoking an agent...")
    agent_id, prompt = parse_invoke_body('{"agentId": "rag-1", "prompt": "What is the refund policy?"}')
    reply = client.invoke_agent(agent_id, prompt)
    print(f"   Answer: {reply.answer}")
    for ref in chat_model(reply)["references"]:
        print(f"   Reference: {ref}")

    print("\n   OK: Invocation working\n")

    print(f"4. Token endpoint was called {token_requests} time(s) for 2 API calls")
    assert token_requests == 1

http_client.close()

print("\n=== All examples completed successfully ===")
