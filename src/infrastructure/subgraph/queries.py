"""GraphQL documents for the ENS subgraph `nameRegistereds` entity."""

REGISTRATIONS_QUERY = """
query fetchRecentRegistrations($targetTimestamp: BigInt!, $skip: Int!) {
  nameRegistereds(
    where: { blockTimestamp_gte: $targetTimestamp }
    orderBy: blockNumber
    orderDirection: desc
    first: 100
    skip: $skip
  ) {
    id
    name
    owner
    transactionHash
    blockNumber
    blockTimestamp
  }
}
"""

# Same filter and ordering, id only. Used for computing totals.
REGISTRATION_IDS_QUERY = """
query fetchRecentRegistrationIds($targetTimestamp: BigInt!, $skip: Int!) {
  nameRegistereds(
    where: { blockTimestamp_gte: $targetTimestamp }
    orderBy: blockNumber
    orderDirection: desc
    first: 100
    skip: $skip
  ) {
    id
  }
}
"""
