"""
Interactive order chat.

    python -m chatclient --token <jwt_access_token> [--order 7]

Commands inside the chat:
    /orders                  list your orders
    /open <id>               switch to another order
    /new <gig_id> <message>  order a gig and open its chat
    /status <value>          request a status transition (e.g. accepted)
    /quit                    leave
Anything else is sent as a message.
"""
import argparse
import asyncio
import logging
import threading
import requests
import websockets

from .api import OrdersApi, ApiError
from .connection import ChatConnection
from .session import OrderChatSession

logger = logging.getLogger('chatclient')


def parse_order_id(text):
    """Return the id as an int, or None when `text` is not a positive integer."""
    text = (text or '').strip()
    if not text.isdigit() or int(text) == 0:
        return None
    return int(text)


def print_event(session):
    def _print(event, data):
        if event == 'conversation':
            print(f"\n--- Order #{session.active_order_id}: {len(session.messages)} messages ---")
            for message in session.messages:
                print_message(session, message)
        elif event == 'newMessage':
            print_message(session, data)
        elif event == 'orderStatus':
            print(f"*** Order #{data['orderId']} is now {data['status']} (paid: {data['paid']})")
        elif event == 'errorMessage':
            print(f"!!! {data}")
    return _print


def print_message(session, message):
    who = 'you' if session.is_own(message) else message.get('senderName')
    print(f"[{message.get('createdAt')}] {who}: {message.get('message')}")


def print_orders(orders, user_id):
    for order in orders:
        other = order['buyer'] if order['seller']['id'] == user_id else order['seller']
        print(f"  #{order['id']:<5} {order['status']:<12} {other['name']} - {order['gig']['title']}")


def read_lines(loop, lines):
    """Feed stdin into `lines` from a daemon thread; None marks end of input."""
    def _reader():
        while True:
            try:
                line = input('> ')
            except EOFError:
                line = None
            loop.call_soon_threadsafe(lines.put_nowait, line)
            if line is None:
                return

    threading.Thread(target=_reader, daemon=True).start()


async def open_order(api, session, order_id):
    loop = asyncio.get_running_loop()
    order = await loop.run_in_executor(None, api.get_order, order_id)
    session.open_order(order['id'], status=order['status'], paid=order['paid'])


async def run_command(api, session, line):
    loop = asyncio.get_running_loop()
    command, _, arg = line.partition(' ')

    if command == '/orders':
        orders = await loop.run_in_executor(None, api.list_orders)
        print_orders(orders, session.user_id)
    elif command == '/open':
        order_id = parse_order_id(arg)
        if order_id is None:
            print("Usage: /open <order id>")
            return
        await open_order(api, session, order_id)
    elif command == '/new':
        gig_id, _, text = arg.strip().partition(' ')
        gig_id = parse_order_id(gig_id)
        if gig_id is None or not text.strip():
            print("Usage: /new <gig id> <message>")
            return
        order = await loop.run_in_executor(None, api.create_order, gig_id, text.strip())
        session.open_order(order['id'], status=order['status'], paid=order['paid'])
    elif command == '/status':
        if session.active_order_id is None:
            print("Open an order first.")
            return
        order = await loop.run_in_executor(
            None, api.update_status, session.active_order_id, arg.strip()
        )
        session.status = order['status']
    else:
        print(f"Unknown command {command}.")


async def chat(api, session):
    lines = asyncio.Queue()
    read_lines(asyncio.get_running_loop(), lines)

    while True:
        line = await lines.get()
        if line is None:
            break

        line = line.strip()
        if not line:
            continue

        if line in ('/quit', '/exit'):
            break
        elif line.startswith('/'):
            try:
                await run_command(api, session, line)
            except ApiError as e:
                print(f"!!! {e} (HTTP {e.status_code})")
            except requests.RequestException as e:
                print(f"!!! Request failed: {e}")
        elif not session.send_message(line):
            print("Open an order first.")


async def main(token, order_id=None):
    loop = asyncio.get_running_loop()
    api = OrdersApi(token)
    me = await loop.run_in_executor(None, api.me)

    connection = ChatConnection(token)
    session = OrderChatSession(me['id'], connection.send)
    session.add_listener(print_event(session))

    print(f"Logged in as {me['name']}. Your orders:")
    print_orders(await loop.run_in_executor(None, api.list_orders), me['id'])
    if order_id is not None:
        await open_order(api, session, order_id)

    pump = asyncio.create_task(connection.run(session))
    typing = asyncio.create_task(chat(api, session))

    done, _ = await asyncio.wait({pump, typing}, return_when=asyncio.FIRST_COMPLETED)
    if typing in done:
        session.close_order()
        connection.close()
        await pump
    else:
        # The server ended the connection; stdin is read by a daemon thread
        typing.cancel()
        print("\nDisconnected from the server.")
        pump.result()


def run():
    parser = argparse.ArgumentParser(description='Chat about your gig orders.')
    parser.add_argument('--token', required=True, help='JWT access token')
    parser.add_argument('--order', type=int, help='Order to open right away')
    parser.add_argument('-v', '--verbose', action='store_true')
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(asctime)s %(name)s %(message)s',
    )

    try:
        asyncio.run(main(args.token, args.order))
    except KeyboardInterrupt:
        print("\nBye.")
    except websockets.exceptions.InvalidStatus as e:
        print(f"Connection refused - HTTP {e.response.status_code}")
        if e.response.status_code == 403:
            print("  - Invalid or expired JWT")
    except (ApiError, requests.RequestException) as e:
        print(f"Request failed: {e}")
    except OSError as e:
        print(f"Cannot reach the chat server: {e}")


if __name__ == '__main__':
    run()
