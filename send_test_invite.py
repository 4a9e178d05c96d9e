# send_test_invite.py

from admin_portal.core.notifier import EmailNotifier


def main():
    print("Sending test invitation...")

    EmailNotifier().send_invite_link(
        from_email="admin@example.com",
        to_email="YOUR_EMAIL@example.com",  # <-- change to the inbox you want to check
        link="http://127.0.0.1:5500/otp-flow.html?email=YOUR_EMAIL%40example.com&code=123456",
    )

    print("If no errors: invitation sent! Check your inbox.")


if __name__ == "__main__":
    main()
