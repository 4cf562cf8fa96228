class Recommendations:
    _MAP = {
        "OK": "Forward and reverse records are consistent. No action needed.",

        # Forward -> reverse
        "A_WITHOUT_PTR": (
            "Add a PTR record in the matching in-addr.arpa. zone for at least one of the name's IPv4 "
            "addresses, pointing back to the name. If the address is not yours to delegate, "
            "ask the owner of the reverse zone to publish it."
        ),
        "AAAA_WITHOUT_PTR": (
            "Add a PTR record in the matching ip6.arpa. zone for at least one of the name's IPv6 "
            "addresses, pointing back to the name. Check the nibble order of the owner name."
        ),

        # Reverse -> forward
        "PTR_WITHOUT_FORWARD": (
            "The PTR target has no A/AAAA record for this address. Add the forward record, "
            "fix the target name (trailing dot, typo), or remove the stale PTR."
        ),

        # Preparation errors
        "MALFORMED_ADDRESS": "An A/AAAA record carries an address that is not a valid literal of its family. Fix the record and re-run.",
        "MALFORMED_PTR_OWNER": "A PTR record lives outside in-addr.arpa. and ip6.arpa. Move it to a reverse zone or change its type.",
    }

    @classmethod
    def recommend(cls, issue: str) -> str:
        return cls._MAP.get((issue or "").strip().upper(), "Review the record and the zone it comes from.")
