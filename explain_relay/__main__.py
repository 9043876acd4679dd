from explain_relay.main import run

run()
